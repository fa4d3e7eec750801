"""Small numeric helpers for angles, signs and first-order filter gains."""

from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi


def angular_minus(a: float, b: float) -> float:
    """Return the shortest signed angular difference ``a - b`` in radians."""
    a = math.fmod(a, TWO_PI)
    b = math.fmod(b, TWO_PI)
    res1 = a - b
    res2 = (a + TWO_PI - b) if a < b else (a - TWO_PI - b)
    return res1 if abs(res1) < abs(res2) else res2


def min_abs(a: float, b: float) -> float:
    """Clamp the magnitude of ``a`` to ``b`` while keeping the sign of ``a``."""
    sign = -1.0 if a < 0.0 else 1.0
    return sign * min(abs(a), b)


def sgn(val: float) -> int:
    """Return -1, 0 or 1 according to the sign of ``val``."""
    return int(val > 0) - int(val < 0)


def square(val: float) -> float:
    """Return ``val`` squared."""
    return val * val


def alpha(cutoff: float, freq: float) -> float:
    """Smoothing factor of a first-order low-pass filter at a sample rate."""
    tau = 1.0 / (TWO_PI * cutoff)
    te = 1.0 / freq
    return 1.0 / (1.0 + tau / te)