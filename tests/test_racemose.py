# tests/test_racemose.py
"""
RACEMOSE PATTERN TESTS: Raceme, Spike, Corymb, Umbel
====================================================

All four patterns are indeterminate: the base of the axis flowers first,
so age falls from 1 at the bottom to 0 at the top (umbel flowers all sit
at the top and share age 1).

Most checks use a straight vertical axis of length 10, where the local
frame is known exactly (tangent +Y, normal +X, binormal -Z) and the
expected directions can be written down by hand:

    branch i at angle a, spiral rotation r:
        direction = Ry(i * r) @ (cos a, sin a, 0)
"""

import numpy as np
import pytest

from mini_bloom.generative.racemose import (
    axis_parameter,
    generate_corymb,
    generate_raceme,
    generate_spike,
    generate_umbel,
)
from mini_bloom.generative.axes import curved_points
from mini_bloom.kernel.axis import AxisCurve
from mini_bloom.model import InflorescenceParams, PatternType


def vertical_axis(length=10.0):
    return AxisCurve([(0.0, 0.0, 0.0), (0.0, length, 0.0)])


def azimuth_deg(direction):
    """Spin angle of a direction around +Y, measured from +X toward -Z."""
    return np.degrees(np.arctan2(-direction[2], direction[0]))


def angle_diff(a, b):
    return (a - b + 180.0) % 360.0 - 180.0


# =============================================================================
# RACEME
# =============================================================================

def test_raceme_count_and_age_gradient():
    params = InflorescenceParams(branch_count=5)
    branches = generate_raceme(params, vertical_axis())

    assert len(branches) == 5
    ages = [bp.age for bp in branches]
    assert ages == pytest.approx([1.0, 0.75, 0.5, 0.25, 0.0])

    print("✓ Raceme: oldest flower at the base")


def test_raceme_first_branch_direction():
    """Branch 0 has no spin: direction (cos 60, sin 60, 0) with the bottom angle."""
    params = InflorescenceParams(branch_count=5, angle_bottom=60.0, branch_length_bottom=1.5)
    bp = generate_raceme(params, vertical_axis())[0]

    np.testing.assert_allclose(bp.direction, [0.5, np.sqrt(3) / 2, 0.0], atol=1e-12)
    assert bp.length == pytest.approx(1.5)
    np.testing.assert_allclose(bp.position, [0.75, 1.5 * np.sqrt(3) / 2, 0.0], atol=1e-12)


def test_raceme_interpolates_bottom_to_top():
    params = InflorescenceParams(
        branch_count=3,
        angle_bottom=60.0, angle_top=30.0,
        branch_length_bottom=2.0, branch_length_top=1.0,
        flower_size_bottom=1.0, flower_size_top=0.5,
    )
    branches = generate_raceme(params, vertical_axis())

    assert [bp.length for bp in branches] == pytest.approx([2.0, 1.5, 1.0])
    assert [bp.flower_scale for bp in branches] == pytest.approx([1.0, 0.75, 0.5])
    elevations = [np.degrees(np.arcsin(bp.direction[1])) for bp in branches]
    assert elevations == pytest.approx([60.0, 45.0, 30.0])


def test_raceme_spiral_rotation():
    params = InflorescenceParams(branch_count=8, rotation_angle=137.5)
    branches = generate_raceme(params, vertical_axis())

    for i, bp in enumerate(branches):
        assert abs(angle_diff(azimuth_deg(bp.direction), i * 137.5)) < 1e-6


def test_raceme_bases_lie_on_axis():
    params = InflorescenceParams(branch_count=6)
    branches = generate_raceme(params, vertical_axis())

    for i, bp in enumerate(branches):
        np.testing.assert_allclose(bp.base, [0.0, 10.0 * i / 5, 0.0], atol=1e-12)
        assert np.linalg.norm(bp.direction) == pytest.approx(1.0)


def test_raceme_single_and_empty():
    one = generate_raceme(InflorescenceParams(branch_count=1), vertical_axis())
    assert len(one) == 1
    assert one[0].base[1] == pytest.approx(5.0)
    assert one[0].age == pytest.approx(0.5)
    assert axis_parameter(0, 1) == 0.5

    assert generate_raceme(InflorescenceParams(branch_count=0), vertical_axis()) == []


def test_raceme_on_curved_axis():
    axis = AxisCurve(curved_points((0, 0, 0), (0, 10, 0), 0.7, (1, 0, 0), 8))
    branches = generate_raceme(InflorescenceParams(branch_count=12), axis)

    assert len(branches) == 12
    for bp in branches:
        assert np.linalg.norm(bp.direction) == pytest.approx(1.0)
        assert bp.length >= 0.0


# =============================================================================
# SPIKE
# =============================================================================

def test_spike_is_sessile():
    params = InflorescenceParams(pattern=PatternType.SPIKE, branch_count=6)
    branches = generate_spike(params, vertical_axis())

    assert len(branches) == 6
    for i, bp in enumerate(branches):
        assert bp.length == 0.0
        np.testing.assert_allclose(bp.position, [0.0, 2.0 * i, 0.0], atol=1e-12)
    assert [bp.age for bp in branches] == pytest.approx([1.0, 0.8, 0.6, 0.4, 0.2, 0.0])


# =============================================================================
# CORYMB
# =============================================================================

def test_corymb_flat_top():
    """Every flower is raised to the height of the axis top."""
    params = InflorescenceParams(
        pattern=PatternType.CORYMB,
        axis_length=8.0,
        branch_count=15,
        angle_top=70.0,
        angle_bottom=45.0,
    )
    branches = generate_corymb(params, vertical_axis(8.0))

    for bp in branches:
        assert bp.position[1] == pytest.approx(8.0)
        assert bp.length >= 0.0

    # lowest branch travels the full height along a 45 degree pedicel
    assert branches[0].length == pytest.approx(8.0 / np.sin(np.radians(45.0)))
    # top branch starts at the target height
    assert branches[-1].length == pytest.approx(0.0, abs=1e-9)

    print("✓ Corymb: flat-topped")


def test_corymb_horizontal_branch_keeps_interpolated_length():
    params = InflorescenceParams(
        pattern=PatternType.CORYMB,
        branch_count=3,
        angle_top=0.0,
        angle_bottom=0.0,
        branch_length_bottom=2.0,
        branch_length_top=1.0,
    )
    branches = generate_corymb(params, vertical_axis())
    assert [bp.length for bp in branches] == pytest.approx([2.0, 1.5, 1.0])


# =============================================================================
# UMBEL
# =============================================================================

def test_umbel_single_origin():
    params = InflorescenceParams(
        pattern=PatternType.UMBEL,
        branch_count=6,
        angle_top=65.0,
        branch_length_top=2.5,
        flower_size_top=0.7,
        rotation_angle=60.0,
    )
    branches = generate_umbel(params, vertical_axis())

    assert len(branches) == 6
    for i, bp in enumerate(branches):
        np.testing.assert_allclose(bp.base, [0.0, 10.0, 0.0], atol=1e-12)
        assert bp.length == pytest.approx(2.5)
        assert bp.flower_scale == pytest.approx(0.7)
        assert bp.age == pytest.approx(1.0)
        assert bp.direction[1] == pytest.approx(np.sin(np.radians(65.0)))
        assert abs(angle_diff(azimuth_deg(bp.direction), 60.0 * i)) < 1e-6

    # evenly spread rays cancel sideways
    centroid = np.mean([bp.position for bp in branches], axis=0)
    assert np.hypot(centroid[0], centroid[2]) < 1e-9


def test_umbel_zero_rays():
    assert generate_umbel(InflorescenceParams(pattern='umbel', branch_count=0), vertical_axis()) == []
