"""
Player State Core

Owns the authoritative Player and every operation that changes it.

DESIGN DECISION: There is exactly one mutation primitive, apply().
It clones the committed player, runs a mutator on the clone, evaluates
the Fast Track predicate and commits the clone as a whole. If anything
raises along the way the clone is discarded, so callers never observe a
half-applied action.

All public operations:
1. Parse their inputs (forgiving, see cashflow.validation.parsing)
2. Validate against the committed snapshot (ActionRejectedError on failure)
3. Call apply() with a mutator that writes the change and its ledger entry

Persistence and audit logging subscribe as commit observers; the core
does not know they exist.
"""

import math
from typing import Callable, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from cashflow.config import CashflowSettings, get_settings
from cashflow.engine.calc import (
    asset_liability,
    monthly_cashflow,
    passive_income_monthly,
    should_enter_fast_track,
    total_expenses_monthly,
)
from cashflow.engine.fixed_debts import clear_fixed_debt, sync_fixed_liabilities
from cashflow.errors import ActionRejectedError
from cashflow.models.player import (
    AssetType,
    BusinessAsset,
    LedgerEntryType,
    Liability,
    LiabilityOrigin,
    LiabilityType,
    PersonalPropertyAsset,
    Phase,
    Player,
    Profession,
    RealEstateAsset,
    StockAsset,
    new_player,
)
from cashflow.validation.parsing import (
    Number,
    parse_amount,
    parse_count,
    parse_non_negative,
)
from cashflow.validation.validator import ActionValidator, clean_name


ASSET_LABELS = {
    AssetType.STOCKS: "Stock",
    AssetType.BUSINESS: "Business",
    AssetType.REAL_ESTATE: "Real estate",
    AssetType.PERSONAL_PROPERTY: "Property",
}

Mutator = Callable[[Player], None]


class AutoLoan(BaseModel):
    """An auto loan taken during one action and the shortfall it covered."""

    liability: Liability
    shortfall: float


class Commit(BaseModel):
    """What observers receive after every committed action."""

    action: str
    player: Player
    entered_fast_track: bool = False
    auto_loans: list[AutoLoan] = Field(default_factory=list)


CommitObserver = Callable[[Commit], None]


# =============================================================================
# Mutation helpers (operate on a working copy)
# =============================================================================

def borrow_if_needed(
    player: Player,
    amount: float,
    note: str,
    increment: int = 1000,
    loan_name: str = "Auto Loan",
) -> Optional[Liability]:
    """
    Cover a cash shortfall with an auto loan before a debit.

    The loan principal is the shortfall rounded up to the next multiple of
    `increment`. Returns the new liability, or None when cash already
    covers the amount.
    """
    if amount <= 0 or amount <= player.cash:
        return None

    shortfall = amount - player.cash
    principal = float(math.ceil(shortfall / increment) * increment)
    loan = Liability(
        name=loan_name,
        type=LiabilityType.BANK_LOAN,
        principal=principal,
        payment_monthly=0.0,
        auto_update_cash=True,
        origin=LiabilityOrigin.AUTO,
    )
    player.liabilities.insert(0, loan)
    player.cash += principal
    player.record(LedgerEntryType.ADD_LIABILITY, principal, f"{loan_name} for {note}")
    return loan


def amortize_liabilities(player: Player) -> None:
    """
    Apply one month of payments to every paying liability.

    Principal drops by the monthly payment, floored at 0. A debt whose
    principal is paid down to 0 is settled: its payment stops too.
    Stopping the payment goes beyond reducing the principal; see
    "Amortization of settled debts" in DESIGN.md.
    Fixed mirrors write their new balance back to the profession.
    Liabilities left with neither principal nor payment are dropped.
    """
    for liability in player.liabilities:
        if liability.payment_monthly <= 0:
            continue
        was_owing = liability.principal > 0
        liability.principal = max(0.0, liability.principal - liability.payment_monthly)
        if was_owing and liability.principal == 0:
            liability.payment_monthly = 0.0
        if liability.origin == LiabilityOrigin.FIXED:
            player.profession.set_fixed_debt(
                liability.fixed_key,
                liability.principal,
                liability.payment_monthly,
            )

    player.liabilities = [
        l for l in player.liabilities
        if l.principal > 0 or l.payment_monthly > 0
    ]
    sync_fixed_liabilities(player)


def _as_uuid(value: Union[UUID, str], label: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ActionRejectedError(f"{label} not found.", field=f"{label.lower()}_id") from None


# =============================================================================
# State core
# =============================================================================

class PlayerStateCore:
    """
    The single owner of the Player aggregate.

    Usage:
        core = PlayerStateCore(player)
        core.buy_stock("MYT4U", share_price=10, num_shares=200, dividend_per_share=0.5)
        core.collect_paycheck()
        core.player.cash
    """

    def __init__(
        self,
        player: Optional[Player] = None,
        settings: Optional[CashflowSettings] = None,
        observers: Optional[list[CommitObserver]] = None,
    ):
        self._settings = settings or get_settings().game
        self._observers: list[CommitObserver] = list(observers or [])
        self._pending_loans: list[AutoLoan] = []

        initial = player.model_copy(deep=True) if player else new_player()
        self._player = sync_fixed_liabilities(initial)

    @property
    def player(self) -> Player:
        """A copy of the committed player; edits to it have no effect."""
        return self._player.model_copy(deep=True)

    def subscribe(self, observer: CommitObserver) -> None:
        self._observers.append(observer)

    # -------------------------------------------------------------------------
    # Mutation primitive
    # -------------------------------------------------------------------------

    def apply(self, mutator: Mutator, action: str = "update") -> Player:
        """
        Clone, mutate, evaluate, commit.

        Returns a copy of the newly committed player.
        """
        draft = self._player.model_copy(deep=True)
        self._pending_loans = []
        try:
            mutator(draft)
        finally:
            loans, self._pending_loans = self._pending_loans, []

        entered = False
        if (
            draft.phase == Phase.RAT_RACE
            and not draft.announced_fast_track
            and should_enter_fast_track(draft)
        ):
            draft.phase = Phase.FAST_TRACK
            draft.announced_fast_track = True
            entered = True

        self._player = draft
        self._notify(Commit(
            action=action,
            player=draft.model_copy(deep=True),
            entered_fast_track=entered,
            auto_loans=loans,
        ))
        return self.player

    def _notify(self, commit: Commit) -> None:
        for observer in self._observers:
            observer(commit)

    def _borrow(self, draft: Player, amount: float, note: str) -> None:
        shortfall = amount - draft.cash
        loan = borrow_if_needed(
            draft,
            amount,
            note,
            increment=self._settings.auto_loan_increment,
            loan_name=self._settings.auto_loan_name,
        )
        if loan is not None:
            self._pending_loans.append(AutoLoan(liability=loan.model_copy(), shortfall=shortfall))

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    def _buy(self, asset, cost: float) -> Player:
        note = f"{ASSET_LABELS[AssetType(asset.type)]}: {asset.name}"

        def mutator(draft: Player) -> None:
            draft.assets.insert(0, asset)
            if asset.auto_update_cash:
                self._borrow(draft, cost, note)
                draft.cash -= cost
            draft.record(LedgerEntryType.BUY_ASSET, -cost, note)

        return self.apply(mutator, action=f"buy_{asset.type}")

    def buy_stock(
        self,
        name: str,
        share_price: Number,
        num_shares: Number,
        dividend_per_share: Number = 0,
        auto_update_cash: bool = True,
    ) -> Player:
        share_price = parse_non_negative(share_price)
        num_shares = parse_non_negative(num_shares)
        ActionValidator.validate_stock_purchase(name, share_price, num_shares)

        asset = StockAsset(
            name=clean_name(name),
            share_price=share_price,
            num_shares=num_shares,
            dividend_per_share=parse_non_negative(dividend_per_share),
            auto_update_cash=auto_update_cash,
        )
        return self._buy(asset, cost=share_price * num_shares)

    def _buy_financed(
        self,
        asset_type: AssetType,
        name: str,
        cost: Number,
        down_payment: Number,
        liability: Number,
        cash_flow_monthly: Number,
        auto_update_cash: bool,
    ) -> Player:
        cost = parse_non_negative(cost)
        down_payment = parse_non_negative(down_payment)
        ActionValidator.validate_financed_purchase(asset_type, name, cost, down_payment)

        owed = parse_non_negative(liability)
        if owed <= 0:
            owed = max(0.0, cost - down_payment)

        model = BusinessAsset if asset_type == AssetType.BUSINESS else RealEstateAsset
        asset = model(
            name=clean_name(name),
            cost=cost,
            down_payment=down_payment,
            liability=owed,
            cash_flow_monthly=parse_amount(cash_flow_monthly),
            auto_update_cash=auto_update_cash,
        )
        return self._buy(asset, cost=down_payment)

    def buy_business(
        self,
        name: str,
        cost: Number,
        down_payment: Number,
        liability: Number = 0,
        cash_flow_monthly: Number = 0,
        auto_update_cash: bool = True,
    ) -> Player:
        return self._buy_financed(
            AssetType.BUSINESS, name, cost, down_payment,
            liability, cash_flow_monthly, auto_update_cash,
        )

    def buy_real_estate(
        self,
        name: str,
        cost: Number,
        down_payment: Number,
        liability: Number = 0,
        cash_flow_monthly: Number = 0,
        auto_update_cash: bool = True,
    ) -> Player:
        return self._buy_financed(
            AssetType.REAL_ESTATE, name, cost, down_payment,
            liability, cash_flow_monthly, auto_update_cash,
        )

    def buy_personal_property(
        self,
        name: str,
        cost: Number,
        auto_update_cash: bool = True,
    ) -> Player:
        cost = parse_non_negative(cost)
        ActionValidator.validate_property_purchase(name, cost)

        asset = PersonalPropertyAsset(
            name=clean_name(name),
            cost=cost,
            auto_update_cash=auto_update_cash,
        )
        return self._buy(asset, cost=cost)

    def sell_asset(
        self,
        asset_id: Union[UUID, str],
        price: Number,
        shares: Number = None,
    ) -> Player:
        """
        Sell an asset.

        Stocks may be sold partially (price is per share). Businesses and
        real estate are always sold whole and the buyer's price must cover
        the debt on them; the player keeps the difference.
        """
        asset_id = _as_uuid(asset_id, "Asset")
        asset = ActionValidator.existing_asset(self._player, asset_id)
        price = parse_non_negative(price)
        asset_type = AssetType(asset.type)

        if asset_type == AssetType.STOCKS:
            shares = parse_non_negative(shares)
            ActionValidator.validate_stock_sale(asset.num_shares, price, shares)
            proceeds = price * shares
        else:
            owed = asset_liability(asset)
            ActionValidator.validate_asset_sale(asset, price, owed)
            proceeds = price - owed

        note = f"{ASSET_LABELS[asset_type]}: {asset.name}"

        def mutator(draft: Player) -> None:
            held = draft.find_asset(asset_id)
            if asset_type == AssetType.STOCKS:
                held.num_shares = max(0.0, held.num_shares - shares)
                if held.num_shares <= 0:
                    draft.drop_asset(asset_id)
            else:
                draft.drop_asset(asset_id)
            draft.cash += proceeds
            draft.record(LedgerEntryType.SELL_ASSET, proceeds, note)

        return self.apply(mutator, action="sell_asset")

    def remove_asset(self, asset_id: Union[UUID, str]) -> Player:
        """Drop an asset without any cash movement."""
        asset_id = _as_uuid(asset_id, "Asset")
        asset = ActionValidator.existing_asset(self._player, asset_id)

        def mutator(draft: Player) -> None:
            draft.drop_asset(asset_id)
            draft.record(LedgerEntryType.REMOVE_ASSET, 0.0, asset.name)

        return self.apply(mutator, action="remove_asset")

    # -------------------------------------------------------------------------
    # Liabilities
    # -------------------------------------------------------------------------

    def add_liability(
        self,
        name: str,
        principal: Number,
        payment_monthly: Number = 0,
        liability_type: LiabilityType = LiabilityType.BANK_LOAN,
        auto_update_cash: bool = True,
    ) -> Player:
        principal = parse_non_negative(principal)
        ActionValidator.validate_new_liability(name, principal)

        liability = Liability(
            name=clean_name(name),
            type=liability_type,
            principal=principal,
            payment_monthly=parse_non_negative(payment_monthly),
            auto_update_cash=auto_update_cash,
            origin=LiabilityOrigin.MANUAL,
        )

        def mutator(draft: Player) -> None:
            draft.liabilities.insert(0, liability)
            if liability.auto_update_cash:
                draft.cash += principal
            draft.record(LedgerEntryType.ADD_LIABILITY, principal, f"Borrow: {liability.name}")

        return self.apply(mutator, action="add_liability")

    def remove_liability(self, liability_id: Union[UUID, str]) -> Player:
        """
        Remove a liability without paying it.

        Removing a fixed mirror cancels that debt on the profession.
        """
        liability_id = _as_uuid(liability_id, "Liability")
        liability = ActionValidator.existing_liability(self._player, liability_id)

        def mutator(draft: Player) -> None:
            if liability.origin == LiabilityOrigin.FIXED:
                clear_fixed_debt(draft, liability.fixed_key)
            draft.drop_liability(liability_id)
            draft.record(LedgerEntryType.REMOVE_LIABILITY, 0.0, liability.name)

        return self.apply(mutator, action="remove_liability")

    def pay_off_liability(self, liability_id: Union[UUID, str]) -> Player:
        liability_id = _as_uuid(liability_id, "Liability")
        liability = ActionValidator.existing_liability(self._player, liability_id)
        ActionValidator.validate_payoff(self._player, liability)

        def mutator(draft: Player) -> None:
            draft.cash -= liability.principal
            if liability.origin == LiabilityOrigin.FIXED:
                clear_fixed_debt(draft, liability.fixed_key)
            draft.drop_liability(liability_id)
            draft.record(
                LedgerEntryType.PAY_OFF_LIABILITY,
                -liability.principal,
                f"Pay off: {liability.name}",
            )

        return self.apply(mutator, action="pay_off_liability")

    # -------------------------------------------------------------------------
    # Money in / out
    # -------------------------------------------------------------------------

    def collect_paycheck(self) -> Player:
        """
        Payday: credit the monthly cash flow, then amortize debts.

        There is no calendar; every call is one month.
        """
        def mutator(draft: Player) -> None:
            amount = monthly_cashflow(draft)
            draft.cash += amount
            draft.record(LedgerEntryType.PAYCHECK, amount, "Collect paycheck")
            amortize_liabilities(draft)

        return self.apply(mutator, action="collect_paycheck")

    def receive_money(self, amount: Number, note: Optional[str] = None) -> Player:
        amount = parse_amount(amount)
        ActionValidator.validate_money_amount("Receive money", amount)
        ActionValidator.validate_note("Receive money", note)

        def mutator(draft: Player) -> None:
            draft.cash += amount
            draft.record(LedgerEntryType.RECEIVE, amount, note or "Receive money")

        return self.apply(mutator, action="receive_money")

    def pay_money(self, amount: Number, note: Optional[str] = None) -> Player:
        amount = parse_amount(amount)
        ActionValidator.validate_money_amount("Pay money", amount)
        ActionValidator.validate_note("Pay money", note)
        label = note or "Pay money"

        def mutator(draft: Player) -> None:
            self._borrow(draft, amount, label)
            draft.cash -= amount
            draft.record(LedgerEntryType.PAY, -amount, label)

        return self.apply(mutator, action="pay_money")

    # -------------------------------------------------------------------------
    # Profession and family
    # -------------------------------------------------------------------------

    def set_profession(
        self,
        profession: Union[Profession, dict],
        apply_savings_to_cash: Optional[bool] = None,
        note: Optional[str] = None,
    ) -> Player:
        """
        Replace the profession card.

        Optionally resets cash to the card's savings, then rebuilds the
        fixed-liability mirror from the new card.
        """
        if isinstance(profession, Profession):
            profession = profession.model_dump()
        try:
            profession = Profession.model_validate(profession)
        except ValidationError as e:
            raise ActionRejectedError(
                f"Set profession: {e.errors()[0]['msg']}.",
                field="profession",
            ) from None
        if apply_savings_to_cash is None:
            apply_savings_to_cash = self._settings.apply_savings_to_cash

        def mutator(draft: Player) -> None:
            draft.profession = profession
            if apply_savings_to_cash:
                draft.cash = profession.savings
            sync_fixed_liabilities(draft)
            draft.record(
                LedgerEntryType.SET_PROFESSION,
                0.0,
                note or profession.profession_name,
            )

        return self.apply(mutator, action="set_profession")

    def set_children(self, value: Number) -> Player:
        children = parse_count(value)

        def mutator(draft: Player) -> None:
            draft.children = children
            draft.record(LedgerEntryType.SET_CHILDREN, 0.0, str(children))

        return self.apply(mutator, action="set_children")

    def set_name(self, name: str) -> Player:
        """Change only the display name. Not a ledger event."""
        ActionValidator.validate_player_name(name)
        cleaned = clean_name(name)

        def mutator(draft: Player) -> None:
            draft.name = cleaned

        return self.apply(mutator, action="set_name")

    def reset(self) -> Player:
        """Start over with a fresh default player."""
        self._player = new_player()
        self._notify(Commit(action="reset", player=self.player))
        return self.player

    # -------------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------------

    def fast_track_progress(self) -> tuple[float, float]:
        """(passive income, total expenses) of the committed player."""
        return passive_income_monthly(self._player), total_expenses_monthly(self._player)
