# mini_bloom/kernel/curves.py
"""
CATMULL-ROM SPLINES: Smooth Curves Through Control Points
=========================================================

PURPOSE:
--------
A Catmull-Rom spline passes THROUGH its control points (unlike Bezier,
which only passes through the ends). That makes it the natural choice for
authored stalks, styles and preset axes: you place the points, the curve
visits them.

SEGMENT CONTRACT:
-----------------
One segment uses a 4-point window (p0, p1, p2, p3):

    t = 0  ->  p1
    t = 1  ->  p2

p0 and p3 only shape the tangents at p1 and p2. A full curve is built by
sliding the window across N >= 4 points, giving N - 3 segments. The first
and last input points are never visited; they only seed the end tangents.

BASIS (uniform, tension = 0.5):
-------------------------------
    P(t) = 0.5 * [ (-t + 2t^2 - t^3)  p0
                 + ( 2 - 5t^2 + 3t^3) p1
                 + ( t + 4t^2 - 3t^3) p2
                 + (-t^2 + t^3)       p3 ]
"""

import numpy as np
from typing import Optional

from .errors import PreconditionError
from .vector import as_points


def catmull_rom_point(p0, p1, p2, p3, t: float) -> np.ndarray:
    """Point on the segment between p1 (t=0) and p2 (t=1)."""
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))
    t2 = t * t
    t3 = t2 * t

    b0 = -t + 2.0 * t2 - t3
    b1 = 2.0 - 5.0 * t2 + 3.0 * t3
    b2 = t + 4.0 * t2 - 3.0 * t3
    b3 = -t2 + t3

    return 0.5 * (b0 * p0 + b1 * p1 + b2 * p2 + b3 * p3)


def catmull_rom_tangent(p0, p1, p2, p3, t: float) -> np.ndarray:
    """Derivative dP/dt of the segment at t (not normalized)."""
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))
    t2 = t * t

    b0 = -1.0 + 4.0 * t - 3.0 * t2
    b1 = -10.0 * t + 9.0 * t2
    b2 = 1.0 + 8.0 * t - 9.0 * t2
    b3 = -2.0 * t + 3.0 * t2

    return 0.5 * (b0 * p0 + b1 * p1 + b2 * p2 + b3 * p3)


def sample_catmull_rom_curve(points, samples_per_segment: int) -> np.ndarray:
    """
    Sample a multi-segment Catmull-Rom curve.

    Each of the N - 3 segments contributes `samples_per_segment` points at
    t = i / samples_per_segment (so t = 1 is left to the next segment), and
    the final interior point points[-2] closes the curve.

    Parameters:
    -----------
    points : array-like, shape (N, dim)
        Control points, N >= 4
    samples_per_segment : int
        Samples per segment, >= 2

    Returns:
    --------
    np.ndarray of shape ((N - 3) * samples_per_segment + 1, dim)

    Raises:
    -------
    PreconditionError
        If fewer than 4 control points or fewer than 2 samples per segment
    """
    pts = as_points(points)
    if len(pts) < 4:
        raise PreconditionError(
            f"Catmull-Rom spline requires at least 4 control points, got {len(pts)}"
        )
    if samples_per_segment < 2:
        raise PreconditionError(
            f"Need at least 2 samples per segment, got {samples_per_segment}"
        )

    curve = []
    for seg in range(len(pts) - 3):
        p0, p1, p2, p3 = pts[seg:seg + 4]
        for i in range(samples_per_segment):
            curve.append(catmull_rom_point(p0, p1, p2, p3, i / samples_per_segment))

    curve.append(pts[-2])
    return np.array(curve)


def bend_curve_points(
    length: float,
    bend_amount: float,
    droop_amount: float = 0.0,
    direction: float = 1.0,
) -> Optional[np.ndarray]:
    """
    Five Catmull-Rom control points for a stalk bent sideways and drooped.

    The curve starts at the origin, bends toward +X (direction=1) or -X
    (direction=-1) by up to half its length, and ends at height `length`.
    A positive droop pulls the middle point down, a negative one raises it
    into an arch. The two outer control points are
    extrapolated so the spline visits start, middle and end.

    Returns None when both bend and droop are negligible (straight stalk).
    """
    if bend_amount < 0.01 and abs(droop_amount) < 0.01:
        return None

    max_displacement = length * 0.5 * bend_amount
    droop_scale = length * 0.4

    start = np.zeros(3)
    middle = np.array([
        max_displacement * 0.7 * direction,
        length * 0.5 - droop_amount * droop_scale * 0.5,
        0.0,
    ])
    end = np.array([max_displacement * 0.4 * direction, length, 0.0])

    before = start - (middle - start) * 0.5
    after = end + (end - middle) * 0.5

    return np.array([before, start, middle, end, after])
