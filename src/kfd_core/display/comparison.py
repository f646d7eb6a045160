"""Epsilon comparisons used by the redraw predicates."""

from __future__ import annotations

import math

__all__ = ["almost_equal", "almost_equal_rel"]


def almost_equal(a: float, b: float, epsilon: float) -> bool:
    return abs(a - b) < epsilon


def almost_equal_rel(a: float, b: float, epsilon: float) -> bool:
    """Relative comparison scaled by ``|a| + |b|``.

    Two zeros compare equal.  Non-finite operands are only equal to an
    identical value, so entering or leaving the finite range is a change.
    """

    if not (math.isfinite(a) and math.isfinite(b)):
        return a == b
    return abs(a - b) <= (abs(a) + abs(b)) * epsilon
