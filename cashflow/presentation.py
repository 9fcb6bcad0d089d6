"""
Presentation Helpers

Display strings for the UI. Nothing here is used by the game core.
"""

import math

from cashflow.engine.calc import asset_liability, asset_monthly_cashflow, asset_value
from cashflow.models.player import Asset, AssetType, LedgerEntryType, Liability, LiabilityOrigin


LEDGER_LABELS = {
    LedgerEntryType.SET_PROFESSION: "Profession set",
    LedgerEntryType.SET_CHILDREN: "Children",
    LedgerEntryType.BUY_ASSET: "Bought",
    LedgerEntryType.SELL_ASSET: "Sold",
    LedgerEntryType.REMOVE_ASSET: "Asset removed",
    LedgerEntryType.ADD_LIABILITY: "Borrowed",
    LedgerEntryType.REMOVE_LIABILITY: "Liability removed",
    LedgerEntryType.PAY_OFF_LIABILITY: "Paid off",
    LedgerEntryType.PAYCHECK: "Paycheck",
    LedgerEntryType.RECEIVE: "Received",
    LedgerEntryType.PAY: "Paid",
}


def format_money(value: float, suffix: str = "kr") -> str:
    """Whole units with space thousands separators: "-12 345 kr"."""
    if not math.isfinite(value):
        value = 0.0
    rounded = int(round(value))
    text = f"{abs(rounded):,}".replace(",", " ")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{text} {suffix}".rstrip()


def ledger_label(entry_type: LedgerEntryType) -> str:
    return LEDGER_LABELS[LedgerEntryType(entry_type)]


def describe_asset(asset: Asset, suffix: str = "kr") -> str:
    """One-line description for asset lists."""
    asset_type = AssetType(asset.type)
    flow = format_money(asset_monthly_cashflow(asset), suffix)
    if asset_type == AssetType.STOCKS:
        return (
            f"{asset.name}: {asset.num_shares:g} shares @ "
            f"{format_money(asset.share_price, suffix)}, {flow}/mo"
        )
    if asset_type == AssetType.PERSONAL_PROPERTY:
        return f"{asset.name}: {format_money(asset_value(asset), suffix)}"
    return (
        f"{asset.name}: cost {format_money(asset.cost, suffix)}, "
        f"owes {format_money(asset_liability(asset), suffix)}, {flow}/mo"
    )


def describe_liability(liability: Liability, suffix: str = "kr") -> str:
    tag = {
        LiabilityOrigin.FIXED: " (profession)",
        LiabilityOrigin.AUTO: " (auto)",
    }.get(liability.origin, "")
    return (
        f"{liability.name}{tag}: {format_money(liability.principal, suffix)}, "
        f"{format_money(liability.payment_monthly, suffix)}/mo"
    )
