# mini_bloom/generative/compound.py
"""
COMPOUND PATTERNS: Compound Raceme and Compound Umbel
=====================================================

PURPOSE:
--------
A compound inflorescence repeats a simple pattern on each of its own
branches: a panicle-like compound raceme (astilbe) is a raceme of racemes,
a compound umbel (dill, carrot) is an umbel of umbellets.

    depth 1    the simple pattern itself
    depth 2    primary rays from the simple pattern; a smaller copy of the
               pattern (depth 1) sits at the tip of every ray
    depth k    the same, with depth k - 1 copies

PLACEMENT:
----------
A sub-inflorescence is generated upright (axis along +Y from the origin)
and placed onto its ray by

    p -> ray.position + R @ (0.5 * p)

where R is the shortest-arc rotation taking +Y onto ray.direction.
The rays themselves carry no flower; all flowers come from the deepest
level and are flattened into one list.
"""

import logging
from typing import Optional

from ..config import DEFAULT_CONFIG, CompoundShrink, GeneratorConfig
from ..kernel.axis import AxisCurve
from ..kernel.vector import Y_AXIS, rotation_between
from ..model import Inflorescence, InflorescenceParams, PatternType
from .axes import axis_points
from .cymose import resolve_depth
from .racemose import generate_raceme, generate_umbel

logger = logging.getLogger(__name__)

_SIMPLE = {
    PatternType.COMPOUND_RACEME: (PatternType.RACEME, generate_raceme),
    PatternType.COMPOUND_UMBEL: (PatternType.UMBEL, generate_umbel),
}


def _shrink_for(pattern: PatternType, config: GeneratorConfig) -> CompoundShrink:
    if pattern is PatternType.COMPOUND_RACEME:
        return config.compound_raceme_shrink
    return config.compound_umbel_shrink


def sub_params(params: InflorescenceParams, shrink: CompoundShrink, depth: int) -> InflorescenceParams:
    """Parameters of the next nesting level: smaller axis, fewer branches, smaller flowers."""
    changes = dict(
        axis_length=params.axis_length * shrink.axis_factor,
        branch_count=max(shrink.min_branch_count, int(params.branch_count * shrink.branch_count_factor)),
        branch_length_top=params.branch_length_top * shrink.pedicel_factor,
        flower_size_top=params.flower_size_top * shrink.flower_factor,
        recursion_depth=depth,
    )
    if shrink.shrink_bottom:
        changes.update(
            branch_length_bottom=params.branch_length_bottom * shrink.pedicel_factor,
            flower_size_bottom=params.flower_size_bottom * shrink.flower_factor,
        )
    return params.replace(**changes)


def generate_compound(
    params: InflorescenceParams,
    axis: Optional[AxisCurve] = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> Inflorescence:
    """
    Build a compound raceme or compound umbel.

    Parameters:
    -----------
    params : InflorescenceParams
        pattern must be CompoundRaceme or CompoundUmbel
    axis : AxisCurve, optional
        Main axis of the top level. When omitted a compound raceme uses a
        straight vertical axis of axis_length and a compound umbel uses
        the (possibly curved) axis built from params.
    config : GeneratorConfig

    Returns:
    --------
    Inflorescence with rays and children filled in when depth > 1.

    Raises:
    -------
    RecursionLimitError
        If recursion_depth exceeds config.max_recursion_depth
    """
    pattern = params.pattern
    simple_pattern, simple_fn = _SIMPLE[pattern]
    depth = resolve_depth(params.recursion_depth, config.compound_depth, config)
    simple_params = params.replace(pattern=simple_pattern)

    if depth <= 1:
        if axis is None:
            axis = AxisCurve(axis_points(params, config))
        logger.debug("%s depth %d, using simple %s", pattern.value, depth, simple_pattern.value)
        return Inflorescence(params, axis, simple_fn(simple_params, axis, config))

    if axis is None:
        if pattern is PatternType.COMPOUND_RACEME:
            axis = AxisCurve([(0.0, 0.0, 0.0), (0.0, params.axis_length, 0.0)])
        else:
            axis = AxisCurve(axis_points(params, config))

    shrink = _shrink_for(pattern, config)
    rays = simple_fn(simple_params, axis, config)

    # every ray carries an identical sub-inflorescence, so build it once
    child = generate_compound(sub_params(params, shrink, depth - 1), config=config)
    logger.debug(
        "%s depth %d: %d rays x %d flowers", pattern.value, depth, len(rays), child.n_flowers
    )

    children = [
        child.transformed(
            shrink.placement_scale,
            rotation_between(Y_AXIS, ray.direction),
            ray.position,
        )
        for ray in rays
    ]
    branch_points = [bp for c in children for bp in c.branch_points]
    return Inflorescence(params, axis, branch_points, rays=rays, children=children)
