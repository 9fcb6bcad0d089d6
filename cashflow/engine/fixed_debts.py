"""
Fixed-Liability Mirror

The profession card carries (balance, payment) pairs for its fixed debts.
They are mirrored into the player's liabilities so that the liabilities
screen, payoff and paycheck amortization treat every debt the same way.

DESIGN DECISION: The profession is authoritative. The mirror is a
materialized view rebuilt by sync_fixed_liabilities after every
profession write; mirror liabilities are never edited on their own.
Changes that start from the liabilities side (payoff, removal,
amortization) write the profession first and let the sync follow.
"""

from uuid import UUID, uuid5

from cashflow.models.player import (
    FixedDebtKey,
    Liability,
    LiabilityOrigin,
    LiabilityType,
    Player,
)


# Display order and names of the mirrors
FIXED_DEBT_NAMES = {
    FixedDebtKey.MORTGAGE: "Home Mortgage",
    FixedDebtKey.STUDENT_LOAN: "School Loans",
    FixedDebtKey.CAR_LOAN: "Car Loans",
    FixedDebtKey.RETAIL_DEBT: "Credit Cards",
}

_FIXED_NAMESPACE = UUID("6f1c0a52-3a2e-4c53-9d4c-0b6f3e7d2a10")


def fixed_liability_id(key: FixedDebtKey) -> UUID:
    """Stable identity of the mirror for one fixed-debt pair."""
    return uuid5(_FIXED_NAMESPACE, f"fixed:{key.value}")


def find_fixed_liability(player: Player, key: FixedDebtKey):
    return next(
        (l for l in player.liabilities if l.origin == LiabilityOrigin.FIXED and l.fixed_key == key),
        None,
    )


def sync_fixed_liabilities(player: Player) -> Player:
    """
    Bring the fixed mirrors in line with the profession, in place.

    For each pair: balance > 0 or payment > 0 means exactly one mirror with
    the same principal and payment; both zero means no mirror. Mirrors that
    already exist keep their position in the list.
    """
    profession = player.profession

    # Reversed so that newly created mirrors end up in display order
    for key in reversed(list(FixedDebtKey)):
        balance, payment = profession.fixed_debt(key)
        balance = max(0.0, balance)
        payment = max(0.0, payment)
        mirrors = [
            l for l in player.liabilities
            if l.origin == LiabilityOrigin.FIXED and l.fixed_key == key
        ]

        if balance <= 0 and payment <= 0:
            if mirrors:
                player.liabilities = [l for l in player.liabilities if l.fixed_key != key]
            continue

        if mirrors:
            keep = mirrors[0]
            keep.principal = balance
            keep.payment_monthly = payment
            # Duplicates can only come from a hand-edited document
            player.liabilities = [
                l for l in player.liabilities
                if l.fixed_key != key or l is keep
            ]
        else:
            player.liabilities.insert(0, Liability(
                id=fixed_liability_id(key),
                name=FIXED_DEBT_NAMES[key],
                type=LiabilityType.BANK_LOAN,
                principal=balance,
                payment_monthly=payment,
                auto_update_cash=False,
                origin=LiabilityOrigin.FIXED,
                fixed_key=key,
            ))

    return player


def clear_fixed_debt(player: Player, key: FixedDebtKey) -> None:
    """Cancel a fixed debt on the profession and drop its mirror."""
    player.profession.clear_fixed_debt(key)
    sync_fixed_liabilities(player)
