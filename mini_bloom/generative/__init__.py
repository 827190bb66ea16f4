# mini_bloom/generative - Inflorescence Pattern Generators
"""
GENERATIVE: Inflorescence Pattern Generators
============================================

This package turns botanical parameters into flower attachment points.
The key idea: every pattern is a pure function

    (params, axis, config) -> List[BranchPoint]

and a small registry picks the right one from params.pattern.

Available Patterns:
-------------------
- racemose: Raceme, Spike, Corymb, Umbel (indeterminate, oldest at base)
- cymose: Dichasium, Drepanium (determinate, oldest at the root)
- compound: CompoundRaceme, CompoundUmbel (a pattern of patterns)

USAGE:
------
    from mini_bloom.generative import generate_inflorescence
    from mini_bloom.model import InflorescenceParams

    params = InflorescenceParams(
        pattern='raceme',
        axis_length=12.0,
        branch_count=8,
        angle_top=45.0, angle_bottom=60.0,
        branch_length_top=0.8, branch_length_bottom=1.2,
    )

    result = generate_inflorescence(params)
    for bp in result.branch_points:
        print(bp.position, bp.age)
"""

import logging
from typing import Callable, Dict, List

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..kernel.axis import AxisCurve
from ..model import BranchPoint, Inflorescence, InflorescenceParams, PatternType
from .aging import apply_age_distribution
from .axes import CurveMode, axis_points, curved_points, pedicel_points
from .compound import generate_compound
from .cymose import generate_dichasium, generate_drepanium
from .racemose import generate_corymb, generate_raceme, generate_spike, generate_umbel

logger = logging.getLogger(__name__)

PatternGenerator = Callable[[InflorescenceParams, AxisCurve, GeneratorConfig], List[BranchPoint]]

PATTERN_GENERATORS: Dict[PatternType, PatternGenerator] = {
    PatternType.RACEME: generate_raceme,
    PatternType.SPIKE: generate_spike,
    PatternType.UMBEL: generate_umbel,
    PatternType.CORYMB: generate_corymb,
    PatternType.DICHASIUM: generate_dichasium,
    PatternType.DREPANIUM: generate_drepanium,
}


def generate_branch_points(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[BranchPoint]:
    """
    Flower attachment points for params.pattern along `axis`.

    Compound patterns return their flattened terminal flowers; `axis`
    is used for the top level only.
    """
    logger.debug(
        "generating %s: branch_count=%d depth=%s",
        params.pattern.value, params.branch_count, params.recursion_depth,
    )
    if params.pattern.is_compound:
        return generate_compound(params, axis, config).branch_points
    return PATTERN_GENERATORS[params.pattern](params, axis, config)


def generate_inflorescence(
    params: InflorescenceParams,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> Inflorescence:
    """
    Build the main axis from params and generate the full skeleton.

    The axis runs from the origin up +Y, bent by axis_curve_amount toward
    axis_curve_direction. A compound raceme with depth > 1 always uses a
    straight main axis.
    """
    if params.pattern.is_compound:
        return generate_compound(params, config=config)

    axis = AxisCurve(axis_points(params, config))
    return Inflorescence(params, axis, generate_branch_points(params, axis, config))


__all__ = [
    'PATTERN_GENERATORS',
    'generate_branch_points',
    'generate_inflorescence',
    'generate_compound',
    'generate_raceme',
    'generate_spike',
    'generate_umbel',
    'generate_corymb',
    'generate_dichasium',
    'generate_drepanium',
    'apply_age_distribution',
    'CurveMode',
    'axis_points',
    'curved_points',
    'pedicel_points',
]
