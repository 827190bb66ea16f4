# mini_bloom/kernel/reconstruct.py
"""
CURVE RECONSTRUCTION: From a Flat Sketch to a Spatial Curve
===========================================================

PURPOSE:
--------
A user sketches a stalk or style as a flat 2D curve (x against height).
Drawn in a plane it looks stiff; real stalks twist out of that plane.
This module lifts the sketch into 3D by inventing a depth coordinate z
such that the 3D curve has CONSTANT curvature magnitude:

    (d2x/dy2)^2 + (d2z/dy2)^2 = k^2

Where the sketch bends hard in x, z barely bends; where the sketch is
straight, z takes over the bending. The result reads as a natural
helix-like curve when viewed from any angle.

ALGORITHM:
----------
1. Resample to uniform height spacing (finite differences need a regular grid)
2. x'' by finite differences (central inside, one-sided at the ends)
3. k = max |x''|, floored at 1e-6
4. |z''| = sqrt(max(0, k^2 - x''^2))
5. Sign of z'': flip every time x'' changes sign, so the curve keeps
   turning the same way instead of folding back on itself
6. Integrate z'' twice (trapezoidal accumulation)
7. Emit (x, height, z)

A perfectly straight sketch gives k ~ 0, hence z ~ 0: no bending is invented.
"""

import numpy as np

from .errors import PreconditionError
from .vector import as_points


def resample_uniform_y(points, n: int) -> np.ndarray:
    """
    Resample a 2D curve (sorted by increasing y) onto n evenly spaced heights.

    Linear interpolation between neighbouring input points; spans are
    floored at 1e-6 so repeated heights do not divide by zero.

    Returns:
    --------
    np.ndarray of shape (n, 2)
    """
    pts = as_points(points, dim=2)
    if len(pts) < 2:
        raise PreconditionError(f"Need at least 2 points to resample, got {len(pts)}")
    if n < 2:
        raise PreconditionError(f"Need at least 2 samples, got {n}")

    y_min = pts[0, 1]
    y_max = pts[-1, 1]
    dy = (y_max - y_min) / (n - 1)

    resampled = np.empty((n, 2))
    idx = 0
    last = len(pts) - 1
    for i in range(n):
        target_y = y_min + i * dy
        # targets increase, so the scan never needs to restart
        while idx < last and pts[idx + 1, 1] < target_y:
            idx += 1

        if idx < last:
            p0 = pts[idx]
            p1 = pts[idx + 1]
            t = (target_y - p0[1]) / max(p1[1] - p0[1], 1e-6)
            resampled[i] = (p0[0] + t * (p1[0] - p0[0]), target_y)
        else:
            resampled[i] = pts[-1]

    return resampled


def second_derivatives_x(points) -> np.ndarray:
    """
    d2x/dy2 on a uniformly spaced curve.

    The three-point stencil is centred on interior samples; the first and
    last samples reuse the stencil of their inner neighbour.
    """
    pts = as_points(points, dim=2)
    n = len(pts)
    if n < 3:
        raise PreconditionError(f"Need at least 3 points for second derivatives, got {n}")

    dy = max(abs(pts[1, 1] - pts[0, 1]), 1e-6)
    x = pts[:, 0]

    d2x = np.empty(n)
    d2x[1:-1] = (x[2:] - 2.0 * x[1:-1] + x[:-2]) / (dy * dy)
    d2x[0] = d2x[1]
    d2x[-1] = d2x[-2]
    return d2x


def determine_z_signs(points, dz2) -> np.ndarray:
    """
    Give the unsigned z'' magnitudes a sign.

    The sign starts positive and flips whenever x'' changes sign between
    consecutive samples (a strict sign change; touching zero does not count).
    Returns a new array; `dz2` is left untouched.
    """
    dz2 = np.array(dz2, dtype=float)
    dx2 = second_derivatives_x(points)
    if len(dx2) != len(dz2):
        raise PreconditionError(f"Length mismatch: {len(dx2)} points vs {len(dz2)} values")

    sign = 1.0
    for i in range(1, len(dz2)):
        if dx2[i] * dx2[i - 1] < 0.0:
            sign = -sign
        dz2[i] *= sign
    return dz2


def integrate_twice(values) -> np.ndarray:
    """
    Double trapezoidal integration with unit step.

    Both the first and second integral start at 0, so the result describes
    a curve that leaves the origin with zero slope.
    """
    f2 = np.asarray(values, dtype=float)
    n = len(f2)
    if n == 0:
        return np.zeros(0)

    f1 = np.zeros(n)
    f0 = np.zeros(n)
    for i in range(1, n):
        f1[i] = f1[i - 1] + 0.5 * (f2[i] + f2[i - 1])
    for i in range(1, n):
        f0[i] = f0[i - 1] + 0.5 * (f1[i] + f1[i - 1])
    return f0


def reconstruct_3d_curve(points_2d) -> np.ndarray:
    """
    Lift a 2D sketch (x, height) into a 3D curve of constant curvature.

    Parameters:
    -----------
    points_2d : array-like, shape (n, 2)
        Sketch samples with monotonically increasing height, n >= 3

    Returns:
    --------
    np.ndarray of shape (n, 3)
        (x, height, z) on a uniform height grid

    Raises:
    -------
    PreconditionError
        If fewer than 3 points are given

    Example:
    --------
    >>> line = [(0.0, 0.0), (0.0, 1.0), (0.0, 2.0)]
    >>> np.round(reconstruct_3d_curve(line)[:, 2], 4)   # stays flat
    array([0., 0., 0.])
    """
    pts = as_points(points_2d, dim=2)
    if len(pts) < 3:
        raise PreconditionError(
            f"Need at least 3 points for 3D reconstruction, got {len(pts)}"
        )

    uniform = resample_uniform_y(pts, len(pts))
    dx2 = second_derivatives_x(uniform)

    k = max(float(np.max(np.abs(dx2))), 1e-6)
    dz2 = np.sqrt(np.maximum(0.0, k * k - dx2 * dx2))
    dz2 = determine_z_signs(uniform, dz2)

    z = integrate_twice(dz2)
    return np.column_stack([uniform[:, 0], uniform[:, 1], z])
