"""Exceptions raised by the game core."""

from typing import Optional


class CashflowError(Exception):
    """Base exception for the cashflow package."""
    pass


class ActionRejectedError(CashflowError):
    """
    A player action failed validation.

    The message is meant to be shown to the user as-is.
    State is never changed when this is raised.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
