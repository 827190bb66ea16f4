# mini_bloom/generative/racemose.py
"""
RACEMOSE PATTERNS: Raceme, Spike, Corymb, Umbel
===============================================

PURPOSE:
--------
Indeterminate inflorescences: the main axis keeps growing at its tip, so
the flowers at the bottom opened first and are the oldest.

    RACEME   stalked flowers spiralling up the axis (lily, foxglove)
    SPIKE    a raceme with no stalks, flowers sit on the axis (lavender)
    CORYMB   a raceme whose stalks are long enough to bring every flower
             up to the same height, a flat top (hydrangea, yarrow)
    UMBEL    every stalk leaves the same point at the top (cherry, onion)

BRANCH DIRECTION:
-----------------
At axis sample s the pedicel direction is built from the local frame:

    1. start from s.normal (sideways)
    2. tilt it by -angle around s.binormal (up toward the tangent)
    3. spin the result by i * rotation_angle around s.tangent

For a vertical axis (normal +X, binormal -Z) step 2 gives
(cos a, sin a, 0): angle 0 is horizontal, angle 90 points straight up.
"""

import logging
from typing import List

import numpy as np

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..kernel.axis import AxisCurve, AxisSample
from ..kernel.vector import lerp, normalize, rotate_about_axis
from ..model import BranchPoint, InflorescenceParams
from .aging import apply_age_distribution

logger = logging.getLogger(__name__)


def branch_direction(sample: AxisSample, angle_deg: float, spin_deg: float) -> np.ndarray:
    """Unit pedicel direction at `sample`, tilted by angle_deg and spun by spin_deg."""
    tilted = rotate_about_axis(sample.normal, sample.binormal, -np.radians(angle_deg))
    spun = rotate_about_axis(tilted, sample.tangent, np.radians(spin_deg))
    return normalize(spun)


def axis_parameter(i: int, count: int) -> float:
    """Normalized position of branch i of count along the axis (0.5 for a lone branch)."""
    return i / (count - 1) if count > 1 else 0.5


def _linear(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig,
    sessile: bool = False,
    flat_top: bool = False,
) -> List[BranchPoint]:
    count = params.branch_count
    target_height = float(axis.sample_at_t(1.0).position[1]) if flat_top else 0.0
    branches = []

    for i in range(count):
        t = axis_parameter(i, count)
        sample = axis.sample_at_t(t)

        angle = lerp(params.angle_bottom, params.angle_top, t)
        flower_scale = lerp(params.flower_size_bottom, params.flower_size_top, t)
        direction = branch_direction(sample, angle, params.rotation_angle * i)

        if sessile:
            length = 0.0
        elif flat_top and abs(direction[1]) > config.corymb_min_direction_y:
            length = max(0.0, (target_height - sample.position[1]) / direction[1])
        else:
            if flat_top:
                logger.debug("corymb branch %d nearly horizontal, using interpolated length", i)
            length = lerp(params.branch_length_bottom, params.branch_length_top, t)

        branches.append(BranchPoint(
            position=sample.position + direction * length,
            direction=direction,
            length=float(length),
            flower_scale=float(flower_scale),
            age=apply_age_distribution(1.0 - t, params.age_distribution, config),
        ))

    return branches


def generate_raceme(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[BranchPoint]:
    """
    Stalked flowers distributed evenly by arc length along the axis.

    Angle, pedicel length and flower size are interpolated from the
    *_bottom values at t=0 to the *_top values at t=1. Native age is 1 - t.

    Example:
    --------
    >>> axis = AxisCurve([(0, 0, 0), (0, 10, 0)])
    >>> pts = generate_raceme(InflorescenceParams(branch_count=5), axis)
    >>> [p.age for p in pts]
    [1.0, 0.75, 0.5, 0.25, 0.0]
    """
    return _linear(params, axis, config)


def generate_spike(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[BranchPoint]:
    """Raceme with sessile flowers: length 0, position on the axis."""
    return _linear(params, axis, config, sessile=True)


def generate_corymb(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[BranchPoint]:
    """
    Raceme whose pedicel lengths bring every flower to the height of the
    axis top. Branches too close to horizontal (|direction.y| <= 0.01)
    keep the interpolated length instead.
    """
    return _linear(params, axis, config, flat_top=True)


def generate_umbel(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[BranchPoint]:
    """
    All rays from the axis top, with the top angle, length and flower size.

    Rays differ only in their spin (i * rotation_angle). Every flower has
    native age 1.0.
    """
    sample = axis.sample_at_t(1.0)
    length = float(params.branch_length_top)
    age = apply_age_distribution(1.0, params.age_distribution, config)

    branches = []
    for i in range(params.branch_count):
        direction = branch_direction(sample, params.angle_top, params.rotation_angle * i)
        branches.append(BranchPoint(
            position=sample.position + direction * length,
            direction=direction,
            length=length,
            flower_scale=float(params.flower_size_top),
            age=age,
        ))
    return branches
