# mini_bloom/presets.py
"""
Named botanical parameter sets.

Each preset is an InflorescenceParams tuned to look like a real plant.
Look one up with get_preset(name) and adjust it with .replace(...).
"""

from typing import Dict, List

from .kernel.errors import PreconditionError
from .model import InflorescenceParams, PatternType


PRESETS: Dict[str, InflorescenceParams] = {
    # Stalked flowers spiralling up a tall stem
    'lily-raceme': InflorescenceParams(
        pattern=PatternType.RACEME,
        axis_length=12.0,
        branch_count=8,
        angle_top=45.0,
        angle_bottom=60.0,
        branch_length_top=0.8,
        branch_length_bottom=1.2,
        rotation_angle=137.5,
        flower_size_top=0.7,
        flower_size_bottom=0.9,
    ),
    # Dense sessile florets, tight spiral
    'lavender-spike': InflorescenceParams(
        pattern=PatternType.SPIKE,
        axis_length=15.0,
        branch_count=24,
        angle_top=15.0,
        angle_bottom=15.0,
        branch_length_top=0.0,
        branch_length_bottom=0.0,
        rotation_angle=144.0,
        flower_size_top=0.5,
        flower_size_bottom=0.6,
    ),
    # Five equal rays from a short stem
    'cherry-umbel': InflorescenceParams(
        pattern=PatternType.UMBEL,
        axis_length=2.0,
        branch_count=5,
        angle_top=65.0,
        angle_bottom=65.0,
        branch_length_top=2.5,
        branch_length_bottom=2.5,
        rotation_angle=72.0,
        flower_size_top=0.7,
        flower_size_bottom=0.7,
    ),
    # Many small rays, near spherical head
    'allium-umbel': InflorescenceParams(
        pattern=PatternType.UMBEL,
        axis_length=1.5,
        branch_count=30,
        angle_top=70.0,
        angle_bottom=70.0,
        branch_length_top=2.0,
        branch_length_bottom=2.0,
        rotation_angle=12.0,
        flower_size_top=0.3,
        flower_size_bottom=0.3,
    ),
    # Flat top
    'hydrangea-corymb': InflorescenceParams(
        pattern=PatternType.CORYMB,
        axis_length=8.0,
        branch_count=15,
        angle_top=70.0,
        angle_bottom=45.0,
        branch_length_top=2.0,
        branch_length_bottom=0.8,
        rotation_angle=137.5,
        flower_size_top=0.6,
        flower_size_bottom=0.6,
    ),
    # Raceme of racemes, plume shaped
    'astilbe-plume': InflorescenceParams(
        pattern=PatternType.COMPOUND_RACEME,
        axis_length=14.0,
        branch_count=10,
        angle_top=30.0,
        angle_bottom=45.0,
        branch_length_top=0.6,
        branch_length_bottom=1.0,
        rotation_angle=137.5,
        flower_size_top=0.7,
        flower_size_bottom=0.8,
        recursion_depth=2,
        branch_ratio=0.5,
    ),
    'dill-compound-umbel': InflorescenceParams(
        pattern=PatternType.COMPOUND_UMBEL,
        axis_length=10.0,
        branch_count=12,
        angle_top=60.0,
        angle_bottom=60.0,
        branch_length_top=3.0,
        branch_length_bottom=3.0,
        rotation_angle=30.0,
        flower_size_top=0.4,
        flower_size_bottom=0.4,
        recursion_depth=2,
    ),
    # Forking cyme, terminal flower oldest
    'carnation-dichasium': InflorescenceParams(
        pattern=PatternType.DICHASIUM,
        axis_length=10.0,
        branch_count=1,
        angle_top=30.0,
        angle_bottom=30.0,
        branch_length_top=2.0,
        branch_length_bottom=2.0,
        rotation_angle=0.0,
        flower_size_top=0.9,
        flower_size_bottom=0.9,
        recursion_depth=3,
        branch_ratio=0.7,
        angle_divergence=35.0,
    ),
    # Sickle-shaped chain
    'forget-me-not-drepanium': InflorescenceParams(
        pattern=PatternType.DREPANIUM,
        axis_length=6.0,
        branch_count=1,
        angle_top=30.0,
        angle_bottom=30.0,
        branch_length_top=1.0,
        branch_length_bottom=1.0,
        rotation_angle=137.5,
        flower_size_top=0.4,
        flower_size_bottom=0.4,
        recursion_depth=8,
        branch_ratio=0.85,
    ),
}


def preset_names() -> List[str]:
    return list(PRESETS)


def get_preset(name: str) -> InflorescenceParams:
    """
    Look up a preset by name.

    Raises:
    -------
    PreconditionError
        If no preset has that name
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise PreconditionError(
            f"Unknown preset: {name!r}. Available: {preset_names()}"
        ) from None
