# mini_bloom/kernel/bspline.py
"""
B-SPLINES: Cox-de Boor Basis and Tensor-Product Surfaces
========================================================

PURPOSE:
--------
B-spline surfaces give smooth, locally controllable sheets (petal blades,
bracts) from a small grid of control points. This module provides:
- basis_function(): the Cox-de Boor recursion
- generate_knot_vector(): open uniform knot vectors
- BSplineSurface: tensor-product evaluation, partial derivatives, normals

RECURSION:
----------
    N(i,0)(u) = 1 if k_i <= u < k_(i+1), else 0

    N(i,p)(u) = (u - k_i) / (k_(i+p) - k_i)             * N(i,p-1)(u)
              + (k_(i+p+1) - u) / (k_(i+p+1) - k_(i+1)) * N(i+1,p-1)(u)

Two details matter for correct results at the domain boundaries:

1. A zero-width knot interval (repeated knot) is always 0, and any ratio
   whose denominator vanishes contributes 0 (0/0 := 0).

2. At u == max knot the half-open interval [k_i, k_(i+1)) would exclude
   u everywhere, so the LAST basis function would drop to 0 at u = 1.
   The interval ending at the max knot is therefore treated as closed.

With these rules the basis functions form a partition of unity:
sum_i N(i,p)(u) == 1 for every u in [0, 1].
"""

import numpy as np
from typing import List, Sequence

from .errors import PreconditionError
from .vector import Y_AXIS, normalize_or

_KNOT_EPS = 1e-10


def basis_function(i: int, p: int, u: float, knots: Sequence[float]) -> float:
    """
    Evaluate the i-th B-spline basis function of degree p at parameter u.

    Parameters:
    -----------
    i : int
        Basis index (0 .. n-1 for n control points)
    p : int
        Degree
    u : float
        Parameter value
    knots : sequence of float
        Knot vector of length n + p + 1

    Returns:
    --------
    float
        N(i,p)(u); 0 for indices that fall outside the knot vector
    """
    m = len(knots)
    if i + p + 1 >= m:
        return 0.0

    if p == 0:
        lo = knots[i]
        hi = knots[i + 1]
        if abs(hi - lo) < _KNOT_EPS:
            return 0.0
        if lo <= u < hi:
            return 1.0
        max_knot = knots[m - 1]
        if abs(u - max_knot) < _KNOT_EPS and abs(hi - max_knot) < _KNOT_EPS:
            if lo <= u <= hi:
                return 1.0
        return 0.0

    left_denom = knots[i + p] - knots[i]
    if abs(left_denom) < _KNOT_EPS:
        left = 0.0
    else:
        left = (u - knots[i]) / left_denom * basis_function(i, p - 1, u, knots)

    right_denom = knots[i + p + 1] - knots[i + 1]
    if abs(right_denom) < _KNOT_EPS:
        right = 0.0
    else:
        right = (knots[i + p + 1] - u) / right_denom * basis_function(i + 1, p - 1, u, knots)

    return left + right


def generate_knot_vector(n: int, p: int, uniform: bool = True) -> List[float]:
    """
    Open (clamped) knot vector for n control points of degree p.

    Layout (length n + p + 1):
        [0] * (p + 1)  +  interior  +  [1] * (p + 1)

    Interior knot i (p+1 <= i < n) is (i - p) / (n - p) when `uniform`,
    otherwise the interior is left at 0.

    Example:
    --------
    >>> generate_knot_vector(5, 3)
    [0.0, 0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0, 1.0]
    """
    if n < 1 or p < 0:
        raise PreconditionError(f"Invalid knot vector request: n={n}, p={p}")

    m = n + p + 1
    knots = [0.0] * m

    if uniform and n > p:
        for i in range(p + 1, n):
            knots[i] = (i - p) / (n - p)

    for i in range(n, m):
        knots[i] = 1.0

    return knots


class BSplineSurface:
    """
    Tensor-product B-spline surface.

        S(u, v) = sum_i sum_j P[i][j] * N(i,p)(u) * N(j,q)(v)

    Rows of the control grid (index i) run along u, columns (index j) along v.

    Attributes:
    -----------
    control_points : np.ndarray, shape (rows, cols, 3)
    degree_u, degree_v : int
    knots_u, knots_v : list of float
        Must have rows + degree_u + 1 and cols + degree_v + 1 entries
    """

    def __init__(
        self,
        control_points,
        degree_u: int,
        degree_v: int,
        knots_u: Sequence[float],
        knots_v: Sequence[float],
    ):
        grid = np.array(control_points, dtype=float)
        if grid.ndim != 3 or grid.shape[2] != 3:
            raise PreconditionError(
                f"Control grid must have shape (rows, cols, 3), got {grid.shape}"
            )
        rows, cols = grid.shape[:2]
        if len(knots_u) != rows + degree_u + 1:
            raise PreconditionError(
                f"knots_u has {len(knots_u)} entries; {rows} rows of degree {degree_u} "
                f"need {rows + degree_u + 1}"
            )
        if len(knots_v) != cols + degree_v + 1:
            raise PreconditionError(
                f"knots_v has {len(knots_v)} entries; {cols} columns of degree {degree_v} "
                f"need {cols + degree_v + 1}"
            )

        self.control_points = grid
        self.degree_u = degree_u
        self.degree_v = degree_v
        self.knots_u = list(knots_u)
        self.knots_v = list(knots_v)

    @classmethod
    def open_uniform(cls, control_points, degree_u: int = 3, degree_v: int = 3) -> "BSplineSurface":
        """Build a surface with open uniform knot vectors in both directions."""
        grid = np.array(control_points, dtype=float)
        if grid.ndim != 3:
            raise PreconditionError(
                f"Control grid must have shape (rows, cols, 3), got {grid.shape}"
            )
        rows, cols = grid.shape[:2]
        return cls(
            grid,
            degree_u,
            degree_v,
            generate_knot_vector(rows, degree_u),
            generate_knot_vector(cols, degree_v),
        )

    def __repr__(self):
        rows, cols = self.control_points.shape[:2]
        return f"BSplineSurface(grid={rows}x{cols}, degree=({self.degree_u}, {self.degree_v}))"

    def evaluate(self, u: float, v: float) -> np.ndarray:
        """Point on the surface at (u, v)."""
        rows, cols = self.control_points.shape[:2]
        point = np.zeros(3)

        for i in range(rows):
            bu = basis_function(i, self.degree_u, u, self.knots_u)
            # zero weights contribute nothing; skipping them saves the inner loop
            if abs(bu) < _KNOT_EPS:
                continue
            for j in range(cols):
                bv = basis_function(j, self.degree_v, v, self.knots_v)
                if abs(bv) < _KNOT_EPS:
                    continue
                point += self.control_points[i, j] * (bu * bv)

        return point

    def derivative_u(self, u: float, v: float, h: float = 0.001) -> np.ndarray:
        """Central-difference estimate of dS/du, probes clamped to [0, 1]."""
        u_plus = min(u + h, 1.0)
        u_minus = max(u - h, 0.0)
        return (self.evaluate(u_plus, v) - self.evaluate(u_minus, v)) / (u_plus - u_minus)

    def derivative_v(self, u: float, v: float, h: float = 0.001) -> np.ndarray:
        """Central-difference estimate of dS/dv, probes clamped to [0, 1]."""
        v_plus = min(v + h, 1.0)
        v_minus = max(v - h, 0.0)
        return (self.evaluate(u, v_plus) - self.evaluate(u, v_minus)) / (v_plus - v_minus)

    def normal(self, u: float, v: float) -> np.ndarray:
        """
        Unit surface normal dS/du x dS/dv.

        Falls back to +Y where the two tangents are (nearly) parallel or
        vanish, e.g. at a collapsed edge of the grid.
        """
        n = np.cross(self.derivative_u(u, v), self.derivative_v(u, v))
        if np.linalg.norm(n) > 1e-6:
            return normalize_or(n, Y_AXIS)
        return Y_AXIS.copy()

    def evaluate_grid(self, nu: int, nv: int) -> np.ndarray:
        """
        Evaluate the surface on a uniform (nu x nv) parameter grid.

        Returns an array of shape (nu, nv, 3), the raw vertex grid a
        tessellator turns into triangles.
        """
        if nu < 2 or nv < 2:
            raise PreconditionError(f"Need at least a 2x2 grid, got {nu}x{nv}")
        us = np.linspace(0.0, 1.0, nu)
        vs = np.linspace(0.0, 1.0, nv)
        return np.array([[self.evaluate(u, v) for v in vs] for u in us])
