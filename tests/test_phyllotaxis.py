# tests/test_phyllotaxis.py
"""
Test the phyllotaxis layouts.

- the golden angle constant and its wrap-around
- Vogel's disc: centre and rim
- evenly spaced circles and whorls
- 3D spirals with radius profiles
"""

import numpy as np
import pytest

from mini_bloom.kernel.phyllotaxis import (
    ANGLE_144,
    GOLDEN_ANGLE,
    fibonacci_angle,
    fibonacci_spiral_3d,
    radial_positions,
    radius_bulge,
    radius_constant,
    radius_linear,
    radius_quadratic,
    vogel_spiral,
    whorled_positions,
)


def test_golden_angle_value():
    assert GOLDEN_ANGLE == pytest.approx(2.399963, abs=1e-6)
    assert np.degrees(GOLDEN_ANGLE) == pytest.approx(137.5078, abs=1e-4)
    assert np.degrees(ANGLE_144) == pytest.approx(144.0)


def test_fibonacci_angle_wraps():
    assert fibonacci_angle(0) == 0.0
    assert fibonacci_angle(1) == pytest.approx(GOLDEN_ANGLE)
    for i in range(200):
        assert 0.0 <= fibonacci_angle(i) < 2.0 * np.pi


def test_vogel_spiral_centre_and_rim():
    np.testing.assert_allclose(vogel_spiral(0, 10, 1.0), [0.0, 0.0])
    assert np.linalg.norm(vogel_spiral(9, 10, 2.0)) == pytest.approx(2.0)
    np.testing.assert_allclose(vogel_spiral(0, 1, 5.0), [0.0, 0.0])


def test_vogel_spiral_uniform_density():
    """Half the points lie inside radius R / sqrt(2) (equal area halves)."""
    n = 401
    pts = np.array([vogel_spiral(i, n, 1.0) for i in range(n)])
    inside = np.sum(np.linalg.norm(pts, axis=1) < 1.0 / np.sqrt(2.0))
    assert abs(inside - n / 2) <= 2


def test_radial_positions():
    pts = radial_positions(4, 1.0)
    np.testing.assert_allclose(pts, [[1, 0], [0, 1], [-1, 0], [0, -1]], atol=1e-12)
    assert radial_positions(0, 1.0).shape == (0, 2)


def test_whorled_positions():
    pts = whorled_positions(3, 2.0, 5.0, angle_offset=0.25)
    assert pts.shape == (3, 3)
    np.testing.assert_allclose(pts[:, 1], 5.0)
    np.testing.assert_allclose(np.hypot(pts[:, 0], pts[:, 2]), 2.0)
    np.testing.assert_allclose(pts.sum(axis=0), [0.0, 15.0, 0.0], atol=1e-12)


def test_fibonacci_spiral_3d_cone():
    pts = fibonacci_spiral_3d(5, 1.0, 4.0, radius_linear)

    assert pts.shape == (5, 3)
    np.testing.assert_allclose(pts[:, 1], [0, 1, 2, 3, 4])
    radii = np.hypot(pts[:, 0], pts[:, 2])
    np.testing.assert_allclose(radii, [1.0, 0.75, 0.5, 0.25, 0.0], atol=1e-12)


def test_fibonacci_spiral_3d_constant_radius():
    pts = fibonacci_spiral_3d(8, 2.0, 1.0)
    np.testing.assert_allclose(np.hypot(pts[:, 0], pts[:, 2]), 2.0)
    assert fibonacci_spiral_3d(0, 1.0, 1.0).shape == (0, 3)


def test_radius_profiles():
    assert radius_constant(0.3) == 1.0
    assert radius_linear(0.25) == pytest.approx(0.75)
    assert radius_quadratic(0.5) == pytest.approx(0.25)
    assert radius_bulge(0.0) == pytest.approx(0.0)
    assert radius_bulge(0.5) == pytest.approx(1.0)
    assert radius_bulge(1.0) == pytest.approx(0.0, abs=1e-12)
