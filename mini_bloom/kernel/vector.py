# mini_bloom/kernel/vector.py
"""
VECTOR HELPERS: numpy Building Blocks for the Geometry Core
===========================================================

PURPOSE:
--------
Every other kernel module works on plain numpy arrays:
    2D point/vector -> shape (2,)
    3D point/vector -> shape (3,)

This module collects the few operations numpy does not give us directly:
- normalization with an explicit fallback for degenerate vectors
- rotation of a vector about an arbitrary axis (Rodrigues' formula)
- the shortest-arc rotation taking one direction onto another
- scalar interpolation helpers (lerp, smoothstep, remap)
- cylindrical / spherical / polar conversions

COORDINATE SYSTEM:
------------------
Y is "up" (the direction a straight inflorescence axis grows). The
horizontal plane is XZ. All angles are radians unless a name says _deg.
"""

import numpy as np
from typing import Optional, Tuple

# Unit axes (read-only so nobody mutates the shared constants)
X_AXIS = np.array([1.0, 0.0, 0.0])
Y_AXIS = np.array([0.0, 1.0, 0.0])
Z_AXIS = np.array([0.0, 0.0, 1.0])
for _axis in (X_AXIS, Y_AXIS, Z_AXIS):
    _axis.setflags(write=False)


def as_vector(v, dim: Optional[int] = None) -> np.ndarray:
    """Convert array-like input to a float64 vector (copy), optionally checking its size."""
    arr = np.array(v, dtype=float)
    if dim is not None and arr.shape != (dim,):
        raise ValueError(f"Expected a vector of size {dim}, got shape {arr.shape}")
    return arr


def as_points(points, dim: Optional[int] = None) -> np.ndarray:
    """Convert a sequence of points to an (n, dim) float64 array (copy)."""
    arr = np.array(points, dtype=float)
    if arr.ndim != 2 or (dim is not None and arr.shape[1] != dim):
        expected = f"(n, {dim})" if dim is not None else "(n, d)"
        raise ValueError(f"Expected points of shape {expected}, got {arr.shape}")
    return arr


def normalize_or(v: np.ndarray, fallback: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return v / |v|, or a copy of `fallback` when v is (numerically) zero.

    The fallback is returned as given; it is the caller's job to pass a unit vector.
    """
    v = np.asarray(v, dtype=float)
    n = np.linalg.norm(v)
    if n <= eps or not np.isfinite(n):
        return np.array(fallback, dtype=float)
    return v / n


def normalize(v: np.ndarray) -> np.ndarray:
    """Return v / |v|, or the zero vector when v has no length."""
    v = np.asarray(v, dtype=float)
    return normalize_or(v, np.zeros_like(v))


def rotate_about_axis(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate vector v by `angle` radians about `axis` (right-hand rule).

    Uses Rodrigues' rotation formula:

        v' = v cos(a) + (k x v) sin(a) + k (k . v)(1 - cos(a))

    where k is the normalized axis. A zero axis leaves v unchanged.

    Example:
    --------
    >>> rotate_about_axis([1, 0, 0], [0, 0, 1], np.pi / 2)
    array([0., 1., 0.])   # (up to rounding)
    """
    v = np.asarray(v, dtype=float)
    k = normalize(axis)
    if not k.any():
        return v.copy()
    c = np.cos(angle)
    s = np.sin(angle)
    return v * c + np.cross(k, v) * s + k * np.dot(k, v) * (1.0 - c)


def any_orthogonal(v: np.ndarray) -> np.ndarray:
    """Unit vector orthogonal to v, built from whichever unit axis is least parallel to it."""
    v = normalize_or(v, Y_AXIS)
    candidate = X_AXIS if abs(v[0]) < 0.9 else Y_AXIS
    return normalize(candidate - np.dot(candidate, v) * v)


def rotation_between(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    3x3 rotation matrix of the shortest arc taking direction `a` onto direction `b`.

    Opposite directions are handled with a half-turn about an arbitrary
    axis orthogonal to `a`.
    """
    a = normalize_or(a, Y_AXIS)
    b = normalize_or(b, Y_AXIS)
    c = float(np.dot(a, b))

    if c > 1.0 - 1e-12:
        return np.eye(3)
    if c < -1.0 + 1e-6:
        k = any_orthogonal(a)
        return 2.0 * np.outer(k, k) - np.eye(3)

    w = np.cross(a, b)
    K = np.array([
        [0.0, -w[2], w[1]],
        [w[2], 0.0, -w[0]],
        [-w[1], w[0], 0.0],
    ])
    return np.eye(3) + K + K @ K / (1.0 + c)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation: a at t=0, b at t=1."""
    return a + (b - a) * t


def smoothstep(t: float) -> float:
    """Hermite smoothstep, clamped to [0, 1]."""
    t = min(max(t, 0.0), 1.0)
    return t * t * (3.0 - 2.0 * t)


def remap(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map `value` from [in_min, in_max] linearly onto [out_min, out_max]."""
    t = (value - in_min) / (in_max - in_min)
    return lerp(out_min, out_max, t)


def from_polar(radius: float, angle: float) -> np.ndarray:
    """2D point at `radius` and `angle` (counter-clockwise from +X)."""
    return np.array([radius * np.cos(angle), radius * np.sin(angle)])


def from_cylindrical(radius: float, angle: float, height: float) -> np.ndarray:
    """3D point from cylindrical coordinates around the vertical (Y) axis.

    The azimuth is measured in the XZ plane from +X towards +Z, which is
    the convention the phyllotaxis functions use for whorls and spirals.
    """
    return np.array([radius * np.cos(angle), height, radius * np.sin(angle)])


def to_cylindrical(p: np.ndarray) -> Tuple[float, float, float]:
    """Inverse of from_cylindrical: (radius, angle in [0, 2pi), height)."""
    x, y, z = np.asarray(p, dtype=float)
    angle = float(np.arctan2(z, x)) % (2.0 * np.pi)
    return float(np.hypot(x, z)), angle, float(y)


def from_spherical(radius: float, theta: float, phi: float) -> np.ndarray:
    """3D point from spherical coordinates; phi is the polar angle from +Y."""
    s = np.sin(phi)
    return np.array([radius * s * np.cos(theta), radius * np.cos(phi), radius * s * np.sin(theta)])
