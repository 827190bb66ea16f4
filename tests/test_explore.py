# File: tests/test_explore.py
"""
Test the explore.py module (random inflorescence variants).

WHY THESE TESTS?
---------------
1. Sampling must be reproducible: same seed = same variants
2. Sampled values must stay inside the documented ranges
3. evaluate_variant must report failures instead of raising
4. run_search must return a well-formed DataFrame

TEST PHILOSOPHY:
---------------
- Small n so the tests stay fast
- Deterministic seeds throughout
"""

import logging

import numpy as np
import pandas as pd
import pytest

from mini_bloom.explore import (
    BRANCH_POINT_COLUMNS,
    ROTATION_CHOICES,
    branch_points_to_frame,
    evaluate_variant,
    run_search,
    sample_params,
)
from mini_bloom.generative import generate_inflorescence
from mini_bloom.model import InflorescenceParams, PatternType


def test_sample_params_reproducible():
    a = sample_params(np.random.default_rng(7), 10)
    b = sample_params(np.random.default_rng(7), 10)
    assert [p.to_dict() for p in a] == [p.to_dict() for p in b]

    c = sample_params(np.random.default_rng(8), 10)
    assert [p.to_dict() for p in a] != [p.to_dict() for p in c]


def test_sample_params_ranges():
    variants = sample_params(np.random.default_rng(0), 200)

    assert len(variants) == 200
    for p in variants:
        assert 8.0 <= p.axis_length <= 16.0
        assert 6 <= p.branch_count <= 20
        assert 20.0 <= p.angle_top <= 60.0
        assert 40.0 <= p.angle_bottom <= 70.0
        assert 0.4 <= p.branch_length_top <= 1.2
        assert 0.8 <= p.branch_length_bottom <= 1.8
        assert p.rotation_angle in ROTATION_CHOICES
        assert 0.5 <= p.flower_size_top <= 0.9
        assert 0.6 <= p.flower_size_bottom <= 1.0
        assert 0.5 <= p.branch_ratio <= 0.8
        assert p.age_distribution == 0.5
        if p.pattern.is_recursive:
            assert p.recursion_depth in (1, 2)
        else:
            assert p.recursion_depth == 1

    # 200 draws over 8 patterns should hit all of them
    assert {p.pattern for p in variants} == set(PatternType)


def test_sample_params_pattern_filter():
    variants = sample_params(np.random.default_rng(1), 20, patterns=["umbel", "Corymb"])
    assert {p.pattern for p in variants} <= {PatternType.UMBEL, PatternType.CORYMB}


def test_branch_points_to_frame():
    result = generate_inflorescence(InflorescenceParams(branch_count=5))
    df = branch_points_to_frame(result.branch_points)

    assert list(df.columns) == BRANCH_POINT_COLUMNS
    assert len(df) == 5
    np.testing.assert_allclose(df['age'], [1.0, 0.75, 0.5, 0.25, 0.0])

    empty = branch_points_to_frame([])
    assert len(empty) == 0
    assert list(empty.columns) == BRANCH_POINT_COLUMNS


def test_evaluate_variant_metrics():
    params = InflorescenceParams(pattern=PatternType.CORYMB, axis_length=8.0, branch_count=10,
                                 angle_top=70.0, angle_bottom=45.0)
    result = evaluate_variant(params)

    assert result['ok'] is True
    assert result['reason'] == ''
    assert result['n_flowers'] == 10
    assert result['pattern'] == 'Corymb'
    # flat top
    assert result['height_span'] == pytest.approx(0.0, abs=1e-9)
    assert result['lateral_spread'] > 0.0
    assert result['mean_age'] == pytest.approx(0.5)


def test_evaluate_variant_reports_rejection():
    params = InflorescenceParams(pattern=PatternType.DICHASIUM, recursion_depth=30)
    result = evaluate_variant(params)

    assert result['ok'] is False
    assert 'exceeds' in result['reason']
    assert result['n_flowers'] == 0


def test_evaluate_variant_empty():
    result = evaluate_variant(InflorescenceParams(branch_count=0))
    assert result['ok'] is True
    assert result['n_flowers'] == 0
    assert result['reason'] == 'no flowers'


def test_run_search_dataframe(caplog):
    with caplog.at_level(logging.INFO, logger="mini_bloom.explore"):
        df = run_search(n=16, seed=3)

    assert isinstance(df, pd.DataFrame)
    assert len(df) == 16
    for col in ['pattern', 'n_flowers', 'height_span', 'lateral_spread',
                'mean_age', 'mean_pedicel_length', 'ok', 'reason']:
        assert col in df.columns
    assert df['ok'].all()
    assert (df['n_flowers'] > 0).all()
    assert "Evaluation complete" in caplog.text

    # same seed, same table
    pd.testing.assert_frame_equal(df, run_search(n=16, seed=3))

    print("✓ run_search returns a reproducible DataFrame")
