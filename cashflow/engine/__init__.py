"""
Game Engine Package

calc: pure derived figures
fixed_debts: profession -> liabilities mirror
state: the player state core and its operations
"""

from cashflow.engine.calc import (
    asset_extra_expenses_monthly,
    asset_liability,
    asset_monthly_cashflow,
    asset_value,
    base_expenses_monthly,
    liabilities_monthly_payments,
    monthly_cashflow,
    net_worth,
    passive_income_monthly,
    should_enter_fast_track,
    summarize,
    total_expenses_monthly,
    total_income_monthly,
)
from cashflow.engine.fixed_debts import (
    FIXED_DEBT_NAMES,
    fixed_liability_id,
    sync_fixed_liabilities,
)
from cashflow.engine.state import (
    AutoLoan,
    Commit,
    PlayerStateCore,
    amortize_liabilities,
    borrow_if_needed,
)

__all__ = [
    "FIXED_DEBT_NAMES",
    "AutoLoan",
    "Commit",
    "PlayerStateCore",
    "amortize_liabilities",
    "asset_extra_expenses_monthly",
    "asset_liability",
    "asset_monthly_cashflow",
    "asset_value",
    "base_expenses_monthly",
    "borrow_if_needed",
    "fixed_liability_id",
    "liabilities_monthly_payments",
    "monthly_cashflow",
    "net_worth",
    "passive_income_monthly",
    "should_enter_fast_track",
    "summarize",
    "sync_fixed_liabilities",
    "total_expenses_monthly",
    "total_income_monthly",
]
