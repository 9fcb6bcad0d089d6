"""
Derived Calculation Engine

Pure functions from a player snapshot to monthly figures.

DESIGN DECISION: Nothing here mutates its input or touches storage.
The state core calls these on its working copy; the UI calls them on the
committed player. Both always agree because there is only one formula.

Rent is counted in base expenses. The other four fixed debts (mortgage,
student loan, car loan, retail debt) are counted only through their
mirrored liabilities' payments.
"""

from cashflow.models.player import (
    Asset,
    AssetType,
    Phase,
    Player,
)
from cashflow.models.summary import FinancialSummary


def asset_monthly_cashflow(asset: Asset) -> float:
    """Signed monthly cash flow of one asset."""
    if asset.type == AssetType.STOCKS:
        return asset.dividend_per_share * asset.num_shares
    if asset.type in (AssetType.BUSINESS, AssetType.REAL_ESTATE):
        return asset.cash_flow_monthly
    return 0.0


def asset_value(asset: Asset) -> float:
    """Market value for stocks, stored cost for everything else."""
    if asset.type == AssetType.STOCKS:
        return asset.share_price * asset.num_shares
    return asset.cost


def asset_liability(asset: Asset) -> float:
    """Debt carried by a business or real estate asset."""
    if asset.type in (AssetType.BUSINESS, AssetType.REAL_ESTATE):
        return asset.liability
    return 0.0


def passive_income_monthly(player: Player) -> float:
    """Only positive asset cash flows count as income."""
    return sum(max(0.0, asset_monthly_cashflow(a)) for a in player.assets)


def asset_extra_expenses_monthly(player: Player) -> float:
    """Negative asset cash flows count as expenses."""
    return sum(max(0.0, -asset_monthly_cashflow(a)) for a in player.assets)


def base_expenses_monthly(player: Player) -> float:
    pr = player.profession
    return (
        pr.taxes
        + pr.other_expenses
        + player.children * pr.per_child_expense
        + pr.rent_payment
    )


def liabilities_monthly_payments(player: Player) -> float:
    return sum(l.payment_monthly for l in player.liabilities)


def total_expenses_monthly(player: Player) -> float:
    return (
        base_expenses_monthly(player)
        + asset_extra_expenses_monthly(player)
        + liabilities_monthly_payments(player)
    )


def total_income_monthly(player: Player) -> float:
    return player.profession.salary + passive_income_monthly(player)


def monthly_cashflow(player: Player) -> float:
    """Payday amount; may be negative."""
    return total_income_monthly(player) - total_expenses_monthly(player)


def should_enter_fast_track(player: Player) -> bool:
    """
    Passive income covers total expenses.

    The caller decides whether the predicate still matters; once a player
    is on the Fast Track it is never evaluated again.
    """
    return passive_income_monthly(player) >= total_expenses_monthly(player)


def net_worth(player: Player) -> float:
    """Cash plus asset values, less every debt the player carries."""
    assets = sum(asset_value(a) for a in player.assets)
    asset_debt = sum(asset_liability(a) for a in player.assets)
    debts = sum(l.principal for l in player.liabilities)
    return player.cash + assets - asset_debt - debts


def summarize(player: Player) -> FinancialSummary:
    """All dashboard figures for one snapshot."""
    return FinancialSummary(
        passive_income=passive_income_monthly(player),
        asset_expenses=asset_extra_expenses_monthly(player),
        base_expenses=base_expenses_monthly(player),
        liabilities_payments=liabilities_monthly_payments(player),
        total_expenses=total_expenses_monthly(player),
        total_income=total_income_monthly(player),
        cashflow=monthly_cashflow(player),
        net_worth=net_worth(player),
        phase=player.phase,
    )


def is_on_fast_track(player: Player) -> bool:
    return player.phase == Phase.FAST_TRACK
