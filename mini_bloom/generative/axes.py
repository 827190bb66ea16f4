# mini_bloom/generative/axes.py
"""
Point paths for the main axis and for pedicels.

These are the centre lines a stem sweep would follow. Both are quadratic
Bezier arcs between two endpoints, bent sideways by a control point that
sits off the midpoint; below a tiny curve amount they collapse to a
straight two-point line.
"""

from enum import Enum

import numpy as np

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..kernel.bezier import sample_quadratic
from ..kernel.errors import PreconditionError
from ..kernel.vector import X_AXIS, Y_AXIS, as_vector, normalize, normalize_or
from ..model import BranchPoint, InflorescenceParams

# Below this curve amount a path is a straight line
MIN_CURVE_AMOUNT = 0.01


class CurveMode(str, Enum):
    """How pedicel curvature varies with flower age."""
    UNIFORM = "Uniform"
    GRADIENT_UP = "GradientUp"      # young (top) flowers bend most
    GRADIENT_DOWN = "GradientDown"  # old (bottom) flowers bend most


def curved_points(start, end, curve_amount: float, curve_direction, num_points: int) -> np.ndarray:
    """
    Quadratic arc from start to end.

    Parameters:
    -----------
    start, end : array-like (3,)
    curve_amount : float
        0 = straight; the control point is offset by
        curve_amount * |end - start| * 0.5 from the midpoint
    curve_direction : array-like (3,)
        Direction of the offset (normalized here)
    num_points : int
        Samples including both ends, >= 2

    Returns:
    --------
    np.ndarray, shape (num_points, 3), or (2, 3) when curve_amount < 0.01
    """
    if num_points < 2:
        raise PreconditionError(f"Need at least 2 points for a curve, got {num_points}")

    start = as_vector(start, dim=3)
    end = as_vector(end, dim=3)
    if curve_amount < MIN_CURVE_AMOUNT:
        return np.array([start, end])

    midpoint = (start + end) * 0.5
    offset = curve_amount * float(np.linalg.norm(end - start)) * 0.5
    control = midpoint + normalize(as_vector(curve_direction, dim=3)) * offset
    return sample_quadratic(start, control, end, num_points)


def axis_points(params: InflorescenceParams, config: GeneratorConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Main axis from the origin up to (0, axis_length, 0), bent by axis_curve_amount."""
    curved = params.axis_curve_amount > MIN_CURVE_AMOUNT
    return curved_points(
        np.zeros(3),
        np.array([0.0, params.axis_length, 0.0]),
        params.axis_curve_amount,
        params.axis_curve_direction,
        config.curved_axis_points if curved else 2,
    )


def effective_curve_amount(curve_amount: float, age: float, mode: CurveMode) -> float:
    mode = CurveMode(mode)
    if mode is CurveMode.GRADIENT_UP:
        return curve_amount * (1.0 - age) ** 2
    if mode is CurveMode.GRADIENT_DOWN:
        return curve_amount * age ** 2
    return curve_amount


def pedicel_points(
    branch: BranchPoint,
    curve_amount: float = 0.0,
    mode: CurveMode = CurveMode.UNIFORM,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """
    Centre line of the stalk from branch.base to branch.position.

    The pedicel bends sideways (perpendicular to both its direction and +Y)
    and slightly down, so curved stalks droop under the flower.
    """
    amount = effective_curve_amount(curve_amount, branch.age, mode)

    direction = normalize(branch.direction)
    side = np.cross(direction, Y_AXIS)
    side = side / np.linalg.norm(side) if np.linalg.norm(side) > 0.1 else X_AXIS
    bend = normalize_or(side + np.array([0.0, -0.5, 0.0]), X_AXIS)

    curved = amount > MIN_CURVE_AMOUNT
    return curved_points(
        branch.base,
        branch.position,
        amount,
        bend,
        config.curved_pedicel_points if curved else 2,
    )
