"""Round scoring and combo arithmetic.

The multiplier is expressed in halves: 2 means 1.0x, 5 means 2.5x.
"""
from __future__ import annotations


def combo_multiplier(streak: int, threshold: int, cap: int = 5) -> int:
    """Multiplier (in halves) for ``streak``, or 0 while no combo is active."""
    if streak < threshold:
        return 0
    return min(streak - threshold + 2, cap)


def round_points(
    base: int,
    streak: int,
    threshold: int,
    cap: int = 5,
    rounding: str = "truncate",
) -> int:
    """Points for a solved round given the streak *including* that round."""
    multiplier = combo_multiplier(streak, threshold, cap)
    if multiplier == 0:
        return base
    if rounding == "round_up":
        return -(-base * multiplier // 2)
    if rounding == "truncate":
        return base * multiplier // 2
    raise ValueError(f"unknown rounding mode {rounding!r}")
