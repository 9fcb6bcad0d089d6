"""
Action Validation

DESIGN DECISION: Every player action is validated BEFORE its mutator runs.
A failed check raises ActionRejectedError with a message written for the
player; the state core never sees invalid input, so there is nothing to
roll back.

Checks here only look at already-parsed numbers and the current player
snapshot. Parsing lives in cashflow.validation.parsing.
"""

from typing import Optional

from cashflow.errors import ActionRejectedError
from cashflow.models.player import (
    NAME_MAX_LENGTH,
    NOTE_MAX_LENGTH,
    PLAYER_NAME_MAX_LENGTH,
    Asset,
    AssetType,
    Liability,
    Player,
)


def require(condition: bool, message: str, field: Optional[str] = None) -> None:
    """Raise ActionRejectedError unless condition holds."""
    if not condition:
        raise ActionRejectedError(message, field=field)


def clean_name(name: Optional[str]) -> str:
    return (name or "").strip()


def require_length(text: Optional[str], limit: int, message: str, field: Optional[str] = None) -> None:
    require(len(text or "") <= limit, message, field=field)


class ActionValidator:
    """
    Validates player actions against the current snapshot.

    Messages follow the pattern "<Action>: <what is wrong>." so the UI can
    show them verbatim.
    """

    # -------------------------------------------------------------------------
    # Names
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_name(
        action_label: str,
        name: str,
        limit: int = NAME_MAX_LENGTH,
        field: Optional[str] = "name",
    ) -> None:
        require_length(
            clean_name(name),
            limit,
            f"{action_label}: name must be at most {limit} characters.",
            field=field,
        )

    @staticmethod
    def validate_player_name(name: str) -> None:
        require(bool(clean_name(name)), "Player name is required.", field="name")
        ActionValidator.validate_name("Player name", name, limit=PLAYER_NAME_MAX_LENGTH)

    # -------------------------------------------------------------------------
    # Purchases
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_stock_purchase(name: str, share_price: float, num_shares: float) -> None:
        require(
            bool(clean_name(name)) and share_price > 0 and num_shares > 0,
            "Add stock: name, share price, and shares are required.",
            field="stocks",
        )
        ActionValidator.validate_name("Add stock", name, field="stocks")

    @staticmethod
    def validate_financed_purchase(
        asset_type: AssetType,
        name: str,
        cost: float,
        down_payment: float,
    ) -> None:
        """Business and real estate: name, cost and down payment."""
        label = "business" if asset_type == AssetType.BUSINESS else "real estate"
        require(
            bool(clean_name(name)) and cost > 0 and down_payment > 0,
            f"Add {label}: name, cost, and down payment are required.",
            field=asset_type.value,
        )
        ActionValidator.validate_name(f"Add {label}", name, field=asset_type.value)

    @staticmethod
    def validate_property_purchase(name: str, cost: float) -> None:
        require(
            bool(clean_name(name)) and cost > 0,
            "Add personal property: name and cost are required.",
            field="personal_property",
        )
        ActionValidator.validate_name("Add personal property", name, field="personal_property")

    # -------------------------------------------------------------------------
    # Sales
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_stock_sale(held_shares: float, price: float, shares: float) -> None:
        require(
            price > 0 and shares > 0,
            "Sell stock: enter price and shares.",
            field="price",
        )
        require(
            shares <= held_shares,
            "Sell stock: shares exceed holdings.",
            field="shares",
        )

    @staticmethod
    def validate_asset_sale(asset: Asset, price: float, liability: float) -> None:
        require(price > 0, "Sell asset: enter a sell price.", field="price")
        require(
            price >= liability,
            f"Sell asset: sell price must cover the {liability:,.0f} still owed on {asset.name}.",
            field="price",
        )

    # -------------------------------------------------------------------------
    # Liabilities and money
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_new_liability(name: str, principal: float) -> None:
        require(
            bool(clean_name(name)) and principal > 0,
            "Add liability: name and principal are required.",
            field="principal",
        )
        ActionValidator.validate_name("Add liability", name, field="name")

    @staticmethod
    def validate_payoff(player: Player, liability: Liability) -> None:
        require(
            player.cash >= liability.principal,
            f"Pay off: not enough cash to pay off {liability.name} "
            f"({liability.principal:,.0f} needed, {player.cash:,.0f} available).",
            field="cash",
        )

    @staticmethod
    def validate_money_amount(action_label: str, amount: float) -> None:
        require(
            amount > 0,
            f"{action_label}: amount must be greater than 0.",
            field="amount",
        )

    @staticmethod
    def validate_note(action_label: str, note: Optional[str]) -> None:
        require_length(
            note,
            NOTE_MAX_LENGTH,
            f"{action_label}: note must be at most {NOTE_MAX_LENGTH} characters.",
            field="note",
        )

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    @staticmethod
    def existing_asset(player: Player, asset_id) -> Asset:
        asset = player.find_asset(asset_id)
        require(asset is not None, "Asset not found.", field="asset_id")
        return asset

    @staticmethod
    def existing_liability(player: Player, liability_id) -> Liability:
        liability = player.find_liability(liability_id)
        require(liability is not None, "Liability not found.", field="liability_id")
        return liability
