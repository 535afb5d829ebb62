"""Text formatting helpers shared by the command handlers."""

from datetime import datetime, tzinfo
from typing import Final, Optional

TIME_FORMAT: Final = "%d/%m/%Y, %H:%M:%S"


def format_number(n: int) -> str:
    """Group thousands with commas: 1234567 -> '1,234,567'."""
    return f"{int(n):,}"


def format_timestamp(ts: float, tz: Optional[tzinfo] = None) -> str:
    """Render unix seconds as `dd/mm/YYYY, HH:MM:SS` (local time if tz is None)."""
    return datetime.fromtimestamp(int(ts), tz=tz).strftime(TIME_FORMAT)


def format_score(score: float) -> str:
    """Shortest text for a float, dropping a trailing '.0' (0.9 -> '0.9', 1.0 -> '1')."""
    if float(score).is_integer():
        return str(int(score))
    return repr(float(score))
