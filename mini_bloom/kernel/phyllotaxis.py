# mini_bloom/kernel/phyllotaxis.py
"""
PHYLLOTAXIS: Botanical Arrangement Patterns
===========================================

PURPOSE:
--------
Plants place repeated organs (leaves, florets, stamens, seeds) at fixed
angular increments. The most common increment is the GOLDEN ANGLE,
~137.508 degrees, which never repeats and packs organs densely.

This module provides stateless functions for:
- golden-angle spirals (fibonacci_angle, vogel_spiral, fibonacci_spiral_3d)
- even circular layouts (radial_positions, whorled_positions)
- radius profiles for 3D spirals (constant, linear, quadratic, bulge)

CONVENTIONS:
------------
2D layouts live in the XY plane. 3D layouts grow along +Y with the ring
in the XZ plane, matching the axis convention of the rest of the package.
"""

import numpy as np
from typing import Callable, Optional

from .vector import from_cylindrical, from_polar

# pi * (3 - sqrt(5)) rad  ~  2.399963 rad  ~  137.5078 deg
GOLDEN_ANGLE = np.pi * (3.0 - np.sqrt(5.0))

# Common divergence angles (radians)
ANGLE_180 = np.pi                  # alternate (distichous)
ANGLE_90 = np.pi / 2.0             # decussate
ANGLE_120 = 2.0 * np.pi / 3.0      # tricussate
ANGLE_144 = 2.0 * np.pi * 2.0 / 5.0  # pentagonal

RadiusProfile = Callable[[float], float]


def fibonacci_angle(index: int) -> float:
    """Azimuth of organ `index` on a golden-angle spiral, wrapped to [0, 2pi)."""
    return (index * GOLDEN_ANGLE) % (2.0 * np.pi)


def vogel_spiral(index: int, count: int, radius: float) -> np.ndarray:
    """
    2D position of point `index` of `count` in Vogel's disc packing.

    The radius grows as sqrt(index / (count - 1)) so point density stays
    uniform over the disc: index 0 sits at the centre, the last index on
    the rim. A single point sits at the centre.

    Example:
    --------
    >>> [vogel_spiral(i, 21, 1.0) for i in range(21)]   # 21 stamens
    """
    r = radius * np.sqrt(index / (count - 1)) if count > 1 else 0.0
    return from_polar(r, index * GOLDEN_ANGLE)


def radial_positions(count: int, radius: float, angle_offset: float = 0.0) -> np.ndarray:
    """`count` points evenly spaced on a circle in the XY plane, shape (count, 2)."""
    if count <= 0:
        return np.zeros((0, 2))
    step = 2.0 * np.pi / count
    return np.array([from_polar(radius, i * step + angle_offset) for i in range(count)])


def whorled_positions(
    count: int,
    radius: float,
    height: float,
    angle_offset: float = 0.0,
) -> np.ndarray:
    """A horizontal ring of `count` points at `height`, shape (count, 3)."""
    if count <= 0:
        return np.zeros((0, 3))
    step = 2.0 * np.pi / count
    return np.array([
        from_cylindrical(radius, i * step + angle_offset, height) for i in range(count)
    ])


def fibonacci_spiral_3d(
    count: int,
    base_radius: float,
    height: float,
    radius_fn: Optional[RadiusProfile] = None,
) -> np.ndarray:
    """
    Golden-angle spiral climbing a vertical axis, shape (count, 3).

    Point i sits at height t * `height` with t = i / (count - 1), azimuth
    fibonacci_angle(i) and radius base_radius * radius_fn(t) (constant
    when radius_fn is None).
    """
    if count <= 0:
        return np.zeros((0, 3))

    out = np.empty((count, 3))
    for i in range(count):
        t = i / (count - 1) if count > 1 else 0.0
        r = base_radius * radius_fn(t) if radius_fn is not None else base_radius
        out[i] = from_cylindrical(r, fibonacci_angle(i), t * height)
    return out


def radius_constant(t: float) -> float:
    return 1.0


def radius_linear(t: float) -> float:
    """Cone: 1 at the base, 0 at the top."""
    return 1.0 - t


def radius_quadratic(t: float) -> float:
    """Smooth cone: (1 - t)^2."""
    s = 1.0 - t
    return s * s


def radius_bulge(t: float) -> float:
    """Bell shape: 0 at both ends, widest in the middle."""
    return float(np.sin(t * np.pi))
