# tests/test_cymose.py
"""
CYMOSE PATTERN TESTS: Dichasium and Drepanium
=============================================

Both patterns are determinate: the root flower (at the axis top) is the
oldest and age falls with depth.

DICHASIUM (binary tree):
    depth d  ->  2^(d+1) - 1 flowers, emitted in pre-order
DREPANIUM (chain):
    depth d  ->  d + 1 flowers

On a vertical axis the root points along +X (the top sample's normal)
and the dichasium forks about -Z, so the whole tree lies in the z = 0 plane.
"""

import dataclasses
import warnings
from pathlib import Path

import numpy as np
import pytest

from mini_bloom.config import DEFAULT_CONFIG
from mini_bloom.generative import cymose
from mini_bloom.generative.cymose import (
    build_dichasium_nodes,
    generate_dichasium,
    generate_drepanium,
    resolve_depth,
)
from mini_bloom.kernel.axis import AxisCurve
from mini_bloom.kernel.errors import PreconditionError, RecursionLimitError
from mini_bloom.model import BranchNode, InflorescenceParams, PatternType


def vertical_axis(length=10.0):
    return AxisCurve([(0.0, 0.0, 0.0), (0.0, length, 0.0)])


def dichasium(**kw):
    return InflorescenceParams(pattern=PatternType.DICHASIUM, **kw)


def drepanium(**kw):
    return InflorescenceParams(pattern=PatternType.DREPANIUM, **kw)


def angle_between_deg(a, b):
    c = np.clip(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)), -1.0, 1.0)
    return np.degrees(np.arccos(c))


# =============================================================================
# DICHASIUM
# =============================================================================

@pytest.mark.parametrize("depth,expected", [(0, 1), (1, 3), (2, 7), (3, 15)])
def test_dichasium_count(depth, expected):
    points = generate_dichasium(dichasium(recursion_depth=depth), vertical_axis())
    assert len(points) == expected


def test_dichasium_default_depth_is_one():
    points = generate_dichasium(dichasium(), vertical_axis())
    assert len(points) == 3


def test_dichasium_root_only():
    points = generate_dichasium(dichasium(recursion_depth=0, branch_length_top=0.5), vertical_axis())

    assert len(points) == 1
    assert points[0].age == pytest.approx(1.0)
    np.testing.assert_allclose(points[0].position, [0.5, 10.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(points[0].direction, [1.0, 0.0, 0.0], atol=1e-12)


def test_dichasium_preorder_ages_and_parents():
    """
    Pre-order for depth 2: root, L, LL, LR, R, RL, RR.
    Each child's pedicel starts where its parent's ends.
    """
    points = generate_dichasium(dichasium(recursion_depth=2), vertical_axis())

    assert [p.age for p in points] == pytest.approx([1.0, 0.5, 0.0, 0.0, 0.5, 0.0, 0.0])

    root, left, ll, lr, right, rl, rr = points
    for parent, child in [(root, left), (root, right), (left, ll), (left, lr), (right, rl), (right, rr)]:
        np.testing.assert_allclose(child.base, parent.position, atol=1e-12)

    print("✓ Dichasium: pre-order, oldest at the root")


def test_dichasium_fork_geometry():
    params = dichasium(recursion_depth=1, branch_ratio=0.7, angle_divergence=30.0, branch_length_top=2.0)
    root, left, right = generate_dichasium(params, vertical_axis())

    assert left.length == pytest.approx(1.4)
    assert right.length == pytest.approx(1.4)
    assert angle_between_deg(root.direction, left.direction) == pytest.approx(30.0)
    assert angle_between_deg(root.direction, right.direction) == pytest.approx(30.0)
    assert angle_between_deg(left.direction, right.direction) == pytest.approx(60.0)
    # mirror images across the root direction
    assert left.direction[1] == pytest.approx(-right.direction[1])


def test_dichasium_is_planar():
    points = generate_dichasium(dichasium(recursion_depth=3), vertical_axis())
    for p in points:
        assert p.position[2] == pytest.approx(0.0, abs=1e-12)


def test_dichasium_scale_falloff():
    params = dichasium(recursion_depth=2, flower_size_top=1.0)
    points = generate_dichasium(params, vertical_axis())
    assert [p.flower_scale for p in points] == pytest.approx([1.0, 0.8, 0.6, 0.6, 0.8, 0.6, 0.6])


def test_build_dichasium_nodes_directly():
    root = BranchNode(position=np.zeros(3), direction=np.array([0.0, 1.0, 0.0]), length=1.0, depth=0)
    nodes = build_dichasium_nodes(root, 2, 0.5, 45.0, np.array([0.0, 0.0, 1.0]))

    assert [n.depth for n in nodes] == [0, 1, 2, 2, 1, 2, 2]
    assert [n.length for n in nodes] == pytest.approx([1.0, 0.5, 0.25, 0.25, 0.5, 0.25, 0.25])
    # +45 about +Z turns +Y toward -X
    assert nodes[1].direction[0] < 0.0
    assert nodes[4].direction[0] > 0.0


def test_dichasium_depth_limit():
    with pytest.raises(RecursionLimitError):
        generate_dichasium(dichasium(recursion_depth=DEFAULT_CONFIG.max_recursion_depth + 1), vertical_axis())

    tight = dataclasses.replace(DEFAULT_CONFIG, max_recursion_depth=3)
    with pytest.raises(RecursionLimitError):
        generate_dichasium(dichasium(recursion_depth=4), vertical_axis(), tight)
    assert len(generate_dichasium(dichasium(recursion_depth=3), vertical_axis(), tight)) == 15


def test_recursion_limit_is_a_precondition_error():
    with pytest.raises(PreconditionError):
        resolve_depth(99, 1, DEFAULT_CONFIG)
    assert resolve_depth(None, 5, DEFAULT_CONFIG) == 5


# =============================================================================
# DREPANIUM
# =============================================================================

def test_drepanium_count():
    assert len(generate_drepanium(drepanium(recursion_depth=4), vertical_axis())) == 5
    assert len(generate_drepanium(drepanium(), vertical_axis())) == 6  # default depth 5
    assert len(generate_drepanium(drepanium(recursion_depth=0), vertical_axis())) == 1


def test_drepanium_chain():
    params = drepanium(recursion_depth=4, branch_ratio=0.8, branch_length_top=1.0, flower_size_top=1.0)
    points = generate_drepanium(params, vertical_axis())

    assert [p.age for p in points] == pytest.approx([1.0, 0.75, 0.5, 0.25, 0.0])
    assert [p.length for p in points] == pytest.approx([1.0, 0.8, 0.64, 0.512, 0.4096])
    assert points[-1].flower_scale == pytest.approx(0.7)

    for parent, child in zip(points, points[1:]):
        np.testing.assert_allclose(child.base, parent.position, atol=1e-12)
        # the spin is about the parent's own direction, so only the tilt shows
        assert angle_between_deg(parent.direction, child.direction) == pytest.approx(15.0)
        assert np.linalg.norm(child.direction) == pytest.approx(1.0)


def test_drepanium_curls_upward_first():
    points = generate_drepanium(drepanium(recursion_depth=3), vertical_axis())
    ys = [p.direction[1] for p in points]
    assert ys == sorted(ys)


@pytest.mark.parametrize("distribution", [0.0, 1.0])
def test_drepanium_keeps_native_ages(distribution):
    params = drepanium(recursion_depth=4, age_distribution=distribution)
    points = generate_drepanium(params, vertical_axis())
    assert [p.age for p in points] == pytest.approx([1.0, 0.75, 0.5, 0.25, 0.0])


def test_dichasium_still_remaps_ages():
    points = generate_dichasium(dichasium(recursion_depth=1, age_distribution=0.0), vertical_axis())
    assert [p.age for p in points] == pytest.approx([0.15] * 3)


def test_drepanium_depth_limit():
    with pytest.raises(RecursionLimitError):
        generate_drepanium(drepanium(recursion_depth=13), vertical_axis())


def test_module_source_compiles_without_warnings():
    """The ASCII tree in the module docstring must not contain invalid escapes."""

    source = Path(cymose.__file__).read_text(encoding="utf-8")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(source, cymose.__file__, "exec")
