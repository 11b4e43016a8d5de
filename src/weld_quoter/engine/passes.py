"""Convert deposited volume into a whole number of weld passes."""

from __future__ import annotations

import math

__all__ = ["count_passes", "volume_per_pass"]


def volume_per_pass(bead_height: float, bead_width: float, weld_length: float) -> float:
    return bead_height * bead_width * weld_length


def count_passes(
    volume: float,
    bead_height: float,
    bead_width: float,
    weld_length: float,
) -> int:
    """Return the passes needed to fill ``volume`` with the given bead.

    Any non-positive input yields 0. A positive volume always needs at least
    one pass, however oversized the bead.
    """

    if volume <= 0 or bead_height <= 0 or bead_width <= 0 or weld_length <= 0:
        return 0
    per_pass = volume_per_pass(bead_height, bead_width, weld_length)
    return max(1, math.ceil(volume / per_pass))
