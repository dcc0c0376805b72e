from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves towards positive infinity (0.25 -> 0.3, -2.5 -> -2.0)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(math.floor(value + 0.5))
