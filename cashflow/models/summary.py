"""
Derived and Outcome Models

FinancialSummary is a read-only snapshot of the calculation engine's
figures for one player. ActionOutcome is what the session hands back to
the UI after every user action.
"""

from typing import Optional

from pydantic import BaseModel, Field

from cashflow.models.player import Phase, Player


class FinancialSummary(BaseModel):
    """Monthly figures derived from a player snapshot."""

    passive_income: float
    asset_expenses: float
    base_expenses: float
    liabilities_payments: float
    total_expenses: float
    total_income: float
    cashflow: float
    net_worth: float
    phase: Phase

    @property
    def passive_income_coverage(self) -> float:
        """Share of total expenses covered by passive income (0 if no expenses)."""
        if self.total_expenses <= 0:
            return 1.0 if self.passive_income > 0 else 0.0
        return self.passive_income / self.total_expenses


class ActionOutcome(BaseModel):
    """
    Result of one user action.

    success=False means the action was rejected and nothing changed.
    """

    success: bool
    message: str = ""
    player: Player
    entered_fast_track: bool = Field(
        default=False,
        description="True only for the action that moved the player to the Fast Track"
    )
    field: Optional[str] = None
