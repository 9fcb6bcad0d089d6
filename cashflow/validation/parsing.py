"""
Numeric Input Parsing

Amounts arrive from text inputs typed by people at a game table:
"12 500", "1,5", "1.250,75", "2,000,000". Parsing is forgiving and never
raises; anything that is not a finite number becomes 0.

Rules:
- all whitespace (including non-breaking spaces) and underscores are dropped
- if both "," and "." occur, the one appearing last is the decimal mark
  and the other is a thousands separator
- a single "," is a decimal comma ("1,5" -> 1.5)
- repeated "," or repeated "." are thousands separators
"""

import math
import re
from typing import Union

Number = Union[int, float, str, None]

_WHITESPACE = re.compile(r"[\s_]+")


def _normalize(text: str) -> str:
    cleaned = _WHITESPACE.sub("", text)
    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            return cleaned.replace(".", "").replace(",", ".")
        return cleaned.replace(",", "")
    if cleaned.count(",") > 1:
        return cleaned.replace(",", "")
    if cleaned.count(".") > 1:
        return cleaned.replace(".", "")
    return cleaned.replace(",", ".")


def parse_amount(value: Number) -> float:
    """Parse user input into a finite float, falling back to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        try:
            parsed = float(_normalize(str(value)))
        except ValueError:
            return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def clamp_non_negative(value: float) -> float:
    """Negative and non-finite values become 0."""
    return value if math.isfinite(value) and value > 0 else 0.0


def parse_non_negative(value: Number) -> float:
    return clamp_non_negative(parse_amount(value))


def parse_count(value: Number) -> int:
    """Parse a whole, non-negative count (e.g. children)."""
    return max(0, math.floor(parse_amount(value)))
