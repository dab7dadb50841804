"""Time estimate parsing and duration formatting."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

_HOURS_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*h")
_MINUTES_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*m")
_LEADING_NUMBER_RE = re.compile(r"\s*([-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:e[-+]?[0-9]+)?)")


def _round_half_up(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)


def parse_minutes(text: str | None) -> int:
    """
    Extract whole minutes from a free-form time estimate.

    Hours and minutes tokens are independent and additive ("1h30m" -> 90,
    "45 minutes" -> 45, "2h" -> 120). Without either token the leading number
    is read as minutes ("20" -> 20). Anything else is 0.
    """
    if not text:
        return 0
    lower = str(text).lower()

    h_match = _HOURS_RE.search(lower)
    m_match = _MINUTES_RE.search(lower)

    minutes = 0
    if h_match:
        minutes += _round_half_up(float(h_match.group(1)) * 60)
    if m_match:
        minutes += _round_half_up(float(m_match.group(1)))
    if not h_match and not m_match:
        number = _LEADING_NUMBER_RE.match(lower)
        if number:
            minutes += _round_half_up(float(number.group(1)))
    return max(minutes, 0)


def format_duration(minutes: int) -> str:
    """
    Format a minute total for summaries: "2.3h" or "45min".

    Hours keep one decimal, rounding the exact float half-up.
    """
    if minutes >= 60:
        exact = Decimal(minutes / 60)
        with localcontext() as ctx:
            # Quantizing needs every integer digit plus the tenths digit
            ctx.prec = max(ctx.prec, exact.adjusted() + 3)
            hours = exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{hours}h"
    return f"{minutes}min"


def format_short_duration(minutes: int) -> str:
    """Format a single task's duration: whole hours ("2h") or "45min"."""
    if minutes >= 60:
        return f"{_round_half_up(minutes / 60)}h"
    return f"{minutes}min"
