# mini_bloom/config.py
"""
Generator configuration and defaults.

Tuned constants of the pattern generators live here rather than inline so
that a caller can adjust them without touching the algorithms. The config
is frozen: pass a modified copy (dataclasses.replace) instead of mutating it.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompoundShrink:
    """How a compound pattern scales parameters from one level to the next."""

    axis_factor: float
    branch_count_factor: float
    min_branch_count: int
    pedicel_factor: float
    flower_factor: float
    # When False only the *_top pedicel length and flower size shrink
    shrink_bottom: bool = True
    # Uniform scale applied when a sub-inflorescence is placed on its ray
    placement_scale: float = 0.5


@dataclass(frozen=True)
class GeneratorConfig:
    """Global generator configuration."""

    # Ceiling on recursion depth for dichasium, drepanium and compound patterns.
    # Node counts grow as 2^(depth+1) for dichasium, so this bounds memory.
    max_recursion_depth: int = 12

    # Corymb: smallest |direction.y| we divide by when solving pedicel length
    corymb_min_direction_y: float = 0.01

    # Age-distribution reference ages
    bud_age: float = 0.15
    bloom_age: float = 0.55

    # Dichasium defaults
    dichasium_depth: int = 1
    dichasium_branch_ratio: float = 0.7
    dichasium_angle_divergence: float = 30.0  # degrees
    dichasium_scale_falloff: float = 0.4

    # Drepanium defaults
    drepanium_depth: int = 5
    drepanium_branch_ratio: float = 0.8
    drepanium_tilt_deg: float = 15.0
    drepanium_scale_falloff: float = 0.3

    # Compound patterns
    compound_depth: int = 1
    compound_raceme_shrink: CompoundShrink = field(default_factory=lambda: CompoundShrink(
        axis_factor=0.4,
        branch_count_factor=0.5,
        min_branch_count=3,
        pedicel_factor=0.6,
        flower_factor=0.7,
        shrink_bottom=True,
    ))
    compound_umbel_shrink: CompoundShrink = field(default_factory=lambda: CompoundShrink(
        axis_factor=0.3,
        branch_count_factor=0.75,
        min_branch_count=4,
        pedicel_factor=0.6,
        flower_factor=0.7,
        shrink_bottom=False,
    ))

    # Curved axes are sampled densely enough for a smooth frame
    curved_axis_points: int = 8
    curved_pedicel_points: int = 6


# Default instance used when no config is passed
DEFAULT_CONFIG = GeneratorConfig()
