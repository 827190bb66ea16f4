# mini_bloom/kernel/bezier.py
"""
BEZIER CURVES: Quadratic and Cubic Evaluation
=============================================

Bezier segments are the cheapest way to describe a smooth bend with a
handful of control points. They are used for curved axes and pedicels
(see generative/axes.py) and anywhere a short, smooth arc is needed.

All functions are dimension-agnostic: pass 2D points and get 2D results,
pass 3D points and get 3D results.

    Quadratic:  B(t) = (1-t)^2 P0 + 2(1-t)t P1 + t^2 P2
    Cubic:      B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3

Endpoints are interpolated exactly: B(0) = P0 and B(1) = last control point.
"""

import numpy as np

from .errors import PreconditionError


def quadratic_bezier(p0, p1, p2, t: float) -> np.ndarray:
    """Point on a quadratic Bezier segment at parameter t in [0, 1]."""
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (p0, p1, p2))
    mt = 1.0 - t
    return p0 * (mt * mt) + p1 * (2.0 * mt * t) + p2 * (t * t)


def cubic_bezier(p0, p1, p2, p3, t: float) -> np.ndarray:
    """Point on a cubic Bezier segment at parameter t in [0, 1]."""
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))
    t2 = t * t
    mt = 1.0 - t
    mt2 = mt * mt
    return p0 * (mt2 * mt) + p1 * (3.0 * mt2 * t) + p2 * (3.0 * mt * t2) + p3 * (t2 * t)


def quadratic_bezier_derivative(p0, p1, p2, t: float) -> np.ndarray:
    """First derivative dB/dt of a quadratic segment (not normalized)."""
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (p0, p1, p2))
    mt = 1.0 - t
    return (p1 - p0) * (2.0 * mt) + (p2 - p1) * (2.0 * t)


def cubic_bezier_derivative(p0, p1, p2, p3, t: float) -> np.ndarray:
    """First derivative dB/dt of a cubic segment (not normalized)."""
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))
    mt = 1.0 - t
    return (p1 - p0) * (3.0 * mt * mt) + (p2 - p1) * (6.0 * mt * t) + (p3 - p2) * (3.0 * t * t)


def _parameters(count: int) -> np.ndarray:
    if count < 2:
        raise PreconditionError(f"Need at least 2 samples, got {count}")
    return np.array([i / (count - 1) for i in range(count)])


def sample_quadratic(p0, p1, p2, count: int) -> np.ndarray:
    """
    Sample `count` points at evenly spaced parameters (both endpoints included).

    Returns:
    --------
    np.ndarray of shape (count, dim)

    Raises:
    -------
    PreconditionError
        If count < 2
    """
    return np.array([quadratic_bezier(p0, p1, p2, t) for t in _parameters(count)])


def sample_cubic(p0, p1, p2, p3, count: int) -> np.ndarray:
    """Cubic counterpart of sample_quadratic()."""
    return np.array([cubic_bezier(p0, p1, p2, p3, t) for t in _parameters(count)])
