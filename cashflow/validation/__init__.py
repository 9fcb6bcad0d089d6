"""Input parsing and action validation."""

from cashflow.validation.parsing import (
    clamp_non_negative,
    parse_amount,
    parse_count,
    parse_non_negative,
)
from cashflow.validation.validator import ActionValidator, require

__all__ = [
    "ActionValidator",
    "clamp_non_negative",
    "parse_amount",
    "parse_count",
    "parse_non_negative",
    "require",
]
