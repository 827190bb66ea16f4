# mini_bloom/generative/aging.py
"""
Developmental age of flowers.

Each generator computes a native age per flower (1 = oldest). The
age_distribution knob then pulls every age toward a bud-like or a
bloom-like reference:

    distribution 0.0   all ages -> bud_age (0.15)
    distribution 0.5   native ages unchanged
    distribution 1.0   all ages -> bloom_age (0.55)

In between the pull is linear in the distance from 0.5.
"""

import logging

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..kernel.vector import lerp

logger = logging.getLogger(__name__)


def apply_age_distribution(
    base_age: float,
    distribution: float,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> float:
    """
    Remap a native age by the age-distribution knob.

    Parameters:
    -----------
    base_age : float
        Native age in [0, 1]
    distribution : float
        Knob in [0, 1]; values outside are clamped with a warning

    Returns:
    --------
    float in [0, 1]
    """
    if distribution < 0.0 or distribution > 1.0:
        clamped = min(max(distribution, 0.0), 1.0)
        logger.warning("age_distribution %.3f outside [0, 1], clamped to %.1f", distribution, clamped)
        distribution = clamped

    if distribution < 0.5:
        weight = (0.5 - distribution) / 0.5
        age = lerp(base_age, config.bud_age, weight)
    elif distribution > 0.5:
        weight = (distribution - 0.5) / 0.5
        age = lerp(base_age, config.bloom_age, weight)
    else:
        age = base_age

    return min(max(age, 0.0), 1.0)
