"""NanoPAC <-> PAC conversion."""

from typing import Final

NANO_PAC_PER_PAC: Final = 1_000_000_000


def to_whole_pac(nano: int) -> int:
    """Convert NanoPAC to whole PAC, truncating toward zero.

    Uses integer arithmetic only.
    """
    whole = abs(nano) // NANO_PAC_PER_PAC
    return -whole if nano < 0 else whole
