# mini_bloom/kernel/axis.py
"""
AXIS CURVE: Arc-Length Sampling with a Local Frame
==================================================

PURPOSE:
--------
Every branch-pattern generator asks the same question: "where along the
main axis is a flower attached, and which way is sideways there?"
AxisCurve answers it for any ordered point sequence.

Two things happen at construction:
- the cumulative arc-length table is computed (first entry 0, last entry
  = total length, never decreasing)
- nothing else: samples are produced on demand and never stored

SAMPLING:
---------
sample_at_t(t) maps a normalized parameter t in [0, 1] to ARC LENGTH, not
to point index. An axis with dense points near the base and sparse points
near the tip still gets evenly spaced samples along its length.

THE FRAME (tangent, normal, binormal):
--------------------------------------
- tangent:  finite difference of the point sequence (central inside,
            one-sided at the ends), fallback +Y
- normal:   discrete second difference (direction of curvature) with the
            tangent component removed; on straight stretches an arbitrary
            perpendicular is used instead
- binormal: tangent x normal
- normal is then recomputed as binormal x tangent so the three vectors are
  exactly orthonormal despite finite-difference noise

For a straight vertical axis the frame is tangent=+Y, normal=+X,
binormal=-Z.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from .errors import PreconditionError
from .vector import X_AXIS, Y_AXIS, as_points, normalize, normalize_or


@dataclass(frozen=True)
class AxisSample:
    """
    Position and orthonormal frame at one point of an axis.

    Attributes:
    -----------
    position : np.ndarray (3,)
    tangent : np.ndarray (3,)
        Unit direction of travel along the curve
    normal : np.ndarray (3,)
        Unit vector toward the centre of curvature (or an arbitrary
        perpendicular on straight stretches)
    binormal : np.ndarray (3,)
        tangent x normal
    """
    position: np.ndarray
    tangent: np.ndarray
    normal: np.ndarray
    binormal: np.ndarray


def compute_arc_lengths(points) -> np.ndarray:
    """Cumulative distance from the first point to each point."""
    pts = as_points(points)
    if len(pts) == 0:
        return np.zeros(0)
    segment_lengths = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    return np.concatenate([[0.0], np.cumsum(segment_lengths)])


def _arbitrary_perpendicular(v: np.ndarray) -> np.ndarray:
    # +Y unless v is nearly vertical, then +X
    candidate = Y_AXIS if abs(v[1]) < 0.9 else X_AXIS
    return normalize_or(candidate - np.dot(candidate, v) * v, X_AXIS)


class AxisCurve:
    """
    Immutable 3D polyline parameterized by normalized arc length.

    Parameters:
    -----------
    points : array-like, shape (n, 3)
        Ordered points, n >= 2

    Raises:
    -------
    PreconditionError
        If fewer than 2 points are given

    Example:
    --------
    >>> axis = AxisCurve([(0, 0, 0), (0, 10, 0)])
    >>> axis.length
    10.0
    >>> axis.sample_at_t(0.5).position
    array([0., 5., 0.])
    """

    def __init__(self, points):
        pts = as_points(points, dim=3)
        if len(pts) < 2:
            raise PreconditionError(f"Need at least 2 points for an axis curve, got {len(pts)}")

        pts.setflags(write=False)
        arc = compute_arc_lengths(pts)
        arc.setflags(write=False)

        self._points = pts
        self._arc_lengths = arc
        self._total_length = float(arc[-1])

    @classmethod
    def from_catmull_rom(cls, control_points, samples_per_segment: int = 8) -> "AxisCurve":
        """Axis through the interior control points of a Catmull-Rom spline."""
        from .curves import sample_catmull_rom_curve
        return cls(sample_catmull_rom_curve(control_points, samples_per_segment))

    @classmethod
    def from_sketch(cls, points_2d) -> "AxisCurve":
        """Axis lifted from a 2D (x, height) sketch by constant-curvature reconstruction."""
        from .reconstruct import reconstruct_3d_curve
        return cls(reconstruct_3d_curve(points_2d))

    def __len__(self):
        return len(self._points)

    def __repr__(self):
        return f"AxisCurve(n={len(self._points)}, length={self._total_length:.4g})"

    @property
    def points(self) -> np.ndarray:
        """Read-only view of the underlying points."""
        return self._points

    @property
    def arc_lengths(self) -> np.ndarray:
        """Read-only cumulative arc-length table."""
        return self._arc_lengths

    @property
    def length(self) -> float:
        """Total arc length."""
        return self._total_length

    def sample_at_t(self, t: float) -> AxisSample:
        """Sample at normalized arc length t (clamped to [0, 1])."""
        t = min(max(float(t), 0.0), 1.0)
        return self._sample_at_arc_length(t * self._total_length)

    def sample_uniform(self, count: int) -> List[AxisSample]:
        """
        `count` samples evenly spaced by arc length, ends included.

        A single sample is taken at the start of the curve.
        """
        if count < 1:
            raise PreconditionError(f"Need at least 1 sample, got {count}")
        if count == 1:
            return [self.sample_at_t(0.0)]
        return [self.sample_at_t(i / (count - 1)) for i in range(count)]

    def _sample_at_arc_length(self, target: float) -> AxisSample:
        n = len(self._points)
        arc = self._arc_lengths

        # linear scan is fine for the handful of points an axis carries
        idx = 0
        while idx < n - 1 and arc[idx + 1] < target:
            idx += 1
        idx = min(idx, n - 2)

        seg_len = arc[idx + 1] - arc[idx]
        local_t = (target - arc[idx]) / seg_len if seg_len > 1e-6 else 0.0

        p0 = self._points[idx]
        p1 = self._points[idx + 1]
        position = p0 + (p1 - p0) * local_t

        tangent = normalize(self._tangent_at_index(idx))
        normal = normalize(self._normal_at_index(idx, tangent))
        binormal = normalize(np.cross(tangent, normal))
        normal = normalize(np.cross(binormal, tangent))

        return AxisSample(position=position, tangent=tangent, normal=normal, binormal=binormal)

    def _tangent_at_index(self, idx: int) -> np.ndarray:
        pts = self._points
        n = len(pts)
        if 0 < idx < n - 1:
            d = pts[idx + 1] - pts[idx - 1]
        elif idx == 0:
            d = pts[1] - pts[0]
        else:
            d = pts[n - 1] - pts[n - 2]
        return normalize_or(d, Y_AXIS)

    def _normal_at_index(self, idx: int, tangent: np.ndarray) -> np.ndarray:
        pts = self._points
        n = len(pts)
        if n < 3:
            return _arbitrary_perpendicular(tangent)

        if 0 < idx < n - 1:
            d2p = pts[idx + 1] - 2.0 * pts[idx] + pts[idx - 1]
        elif idx == 0:
            d2p = pts[2] - 2.0 * pts[1] + pts[0]
        else:
            d2p = pts[n - 1] - 2.0 * pts[n - 2] + pts[n - 3]

        normal = d2p - np.dot(d2p, tangent) * tangent
        if np.linalg.norm(normal) < 1e-4:
            normal = _arbitrary_perpendicular(tangent)

        return normalize_or(normal, X_AXIS)
