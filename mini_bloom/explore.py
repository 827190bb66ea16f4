# Random inflorescence sampling and batch evaluation
"""
EXPLORE: RANDOM INFLORESCENCE VARIANTS
======================================

PURPOSE:
--------
Generate many parameter sets at random, build each skeleton and reduce it
to a handful of shape metrics. The result is a pandas DataFrame that can
be sorted, filtered and plotted to find interesting plants.

    rng -> sample_params -> [InflorescenceParams]
                                  |
                         evaluate_variant (build + metrics)
                                  |
                          run_search -> pd.DataFrame

PARAMETER RANGES:
-----------------
- axis_length: 8-16
- branch_count: 6-20
- angle_top: 20-60 deg, angle_bottom: 40-70 deg
- branch_length_top: 0.4-1.2, branch_length_bottom: 0.8-1.8
- rotation_angle: one of 137.5, 120, 144, 180
- flower_size_top: 0.5-0.9, flower_size_bottom: 0.6-1.0
- recursion_depth: 1-2 for recursive patterns, 1 otherwise
- branch_ratio: 0.5-0.8

Same seed = same variants = same DataFrame.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import DEFAULT_CONFIG, GeneratorConfig
from .generative import generate_inflorescence
from .kernel.errors import PreconditionError
from .model import BranchPoint, InflorescenceParams, PatternType

logger = logging.getLogger(__name__)

ROTATION_CHOICES = (137.5, 120.0, 144.0, 180.0)

BRANCH_POINT_COLUMNS = ['x', 'y', 'z', 'dx', 'dy', 'dz', 'length', 'flower_scale', 'age']


def sample_params(
    rng: np.random.Generator,
    n: int,
    patterns: Optional[Sequence] = None,
) -> List[InflorescenceParams]:
    """
    Draw `n` random parameter sets.

    Parameters:
    -----------
    rng : np.random.Generator
        Use np.random.default_rng(seed) for reproducible draws
    n : int
        Number of variants
    patterns : sequence of PatternType or str, optional
        Patterns to choose from (all eight by default)

    Returns:
    --------
    List[InflorescenceParams]
    """
    if patterns is None:
        choices = list(PatternType)
    else:
        choices = [PatternType.parse(p) for p in patterns]
    if not choices:
        raise PreconditionError("patterns must not be empty")

    variants = []
    for _ in range(n):
        pattern = choices[int(rng.integers(0, len(choices)))]
        variants.append(InflorescenceParams(
            pattern=pattern,
            axis_length=float(rng.uniform(8.0, 16.0)),
            branch_count=int(rng.integers(6, 21)),
            angle_top=float(rng.uniform(20.0, 60.0)),
            angle_bottom=float(rng.uniform(40.0, 70.0)),
            branch_length_top=float(rng.uniform(0.4, 1.2)),
            branch_length_bottom=float(rng.uniform(0.8, 1.8)),
            rotation_angle=ROTATION_CHOICES[int(rng.integers(0, len(ROTATION_CHOICES)))],
            flower_size_top=float(rng.uniform(0.5, 0.9)),
            flower_size_bottom=float(rng.uniform(0.6, 1.0)),
            recursion_depth=int(rng.integers(1, 3)) if pattern.is_recursive else 1,
            branch_ratio=float(rng.uniform(0.5, 0.8)),
            age_distribution=0.5,
        ))
    return variants


def branch_points_to_frame(points: Sequence[BranchPoint]) -> pd.DataFrame:
    """One row per branch point: position, direction, length, flower_scale, age."""
    rows = [
        [*bp.position, *bp.direction, bp.length, bp.flower_scale, bp.age]
        for bp in points
    ]
    return pd.DataFrame(rows, columns=BRANCH_POINT_COLUMNS, dtype=float)


def evaluate_variant(
    params: InflorescenceParams,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> Dict:
    """
    Build one inflorescence and summarise its shape.

    Returns:
    --------
    Dict
        All params fields plus:
        - n_flowers: int
        - height_span: float (max - min flower y)
        - lateral_spread: float (largest flower distance from the Y axis)
        - mean_age: float
        - mean_pedicel_length: float
        - ok: bool (False if the parameters were rejected)
        - reason: str (empty if ok)
    """
    result = params.to_dict()
    result.update(
        n_flowers=0,
        height_span=np.nan,
        lateral_spread=np.nan,
        mean_age=np.nan,
        mean_pedicel_length=np.nan,
        ok=False,
        reason='',
    )

    try:
        inflorescence = generate_inflorescence(params, config)
    except PreconditionError as e:
        result['reason'] = str(e)
        return result

    points = inflorescence.branch_points
    result['n_flowers'] = len(points)
    result['ok'] = True
    if not points:
        result['reason'] = 'no flowers'
        return result

    df = branch_points_to_frame(points)
    result['height_span'] = float(df['y'].max() - df['y'].min())
    result['lateral_spread'] = float(np.hypot(df['x'], df['z']).max())
    result['mean_age'] = float(df['age'].mean())
    result['mean_pedicel_length'] = float(df['length'].mean())
    return result


def run_search(
    n: int = 100,
    seed: int = 42,
    patterns: Optional[Sequence] = None,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> pd.DataFrame:
    """
    Sample `n` variants, evaluate each, and collect the results.

    Returns:
    --------
    pd.DataFrame
        One row per variant with the columns of evaluate_variant
    """
    rng = np.random.default_rng(seed)

    logger.info("Generating %d inflorescence variants (seed=%d)", n, seed)
    variants = sample_params(rng, n, patterns)

    results = []
    for i, params in enumerate(variants):
        if (i + 1) % 50 == 0 or (i + 1) == len(variants):
            logger.info("  Progress: %d/%d", i + 1, len(variants))
        results.append(evaluate_variant(params, config))

    n_ok = sum(r['ok'] for r in results)
    logger.info("Evaluation complete: %d successful, %d failed", n_ok, len(results) - n_ok)

    return pd.DataFrame(results)
