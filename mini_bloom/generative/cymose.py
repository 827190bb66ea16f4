# mini_bloom/generative/cymose.py
r"""
CYMOSE PATTERNS: Dichasium and Drepanium
========================================

PURPOSE:
--------
Determinate inflorescences: the axis ends in a flower, which opens first.
Further flowers appear on branches below it, so age DECREASES with depth.

    DICHASIUM   every node forks into two opposite children, giving a
                binary tree (carnation, baby's breath)

                        *   *   *   *        depth 2
                         \ /     \ /
                          *       *          depth 1
                           \     /
                              *              depth 0 (root, oldest)

    DREPANIUM   every node has a single child turned by the spiral angle
                and tilted a little, giving a sickle-shaped chain
                (forget-me-not)

IMPLEMENTATION:
---------------
Trees are built with an explicit worklist, not call-stack recursion. Node
counts grow as 2^(depth+1) - 1 for a dichasium, so depth is capped by
GeneratorConfig.max_recursion_depth and checked before any work starts.

Each node becomes one BranchPoint at its tip (position + direction * length).
"""

import logging
from typing import List, Optional

import numpy as np

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..kernel.axis import AxisCurve
from ..kernel.errors import RecursionLimitError
from ..kernel.vector import X_AXIS, Y_AXIS, normalize, rotate_about_axis
from ..model import BranchNode, BranchPoint, InflorescenceParams
from .aging import apply_age_distribution

logger = logging.getLogger(__name__)


def resolve_depth(requested: Optional[int], default: int, config: GeneratorConfig) -> int:
    """Requested recursion depth (or the default), checked against the configured ceiling."""
    depth = default if requested is None else int(requested)
    if depth > config.max_recursion_depth:
        raise RecursionLimitError(
            f"recursion_depth {depth} exceeds the limit of {config.max_recursion_depth}"
        )
    return depth


def _root_node(params: InflorescenceParams, axis: AxisCurve):
    sample = axis.sample_at_t(1.0)
    root = BranchNode(
        position=sample.position,
        direction=sample.normal,
        length=float(params.branch_length_top),
        depth=0,
    )
    return root, sample


def _nodes_to_branch_points(
    nodes: List[BranchNode],
    max_depth: int,
    params: InflorescenceParams,
    scale_falloff: float,
    config: GeneratorConfig,
    remap_age: bool = True,
) -> List[BranchPoint]:
    points = []
    for node in nodes:
        age = 1.0 - node.depth / max_depth if max_depth > 0 else 1.0
        if remap_age:
            age = apply_age_distribution(age, params.age_distribution, config)
        t = node.depth / max(1, max_depth)
        points.append(BranchPoint(
            position=node.tip,
            direction=node.direction,
            length=node.length,
            flower_scale=float(params.flower_size_top * (1.0 - scale_falloff * t)),
            age=age,
        ))
    return points


def build_dichasium_nodes(
    root: BranchNode,
    max_depth: int,
    branch_ratio: float,
    angle_divergence: float,
    branching_axis: np.ndarray,
) -> List[BranchNode]:
    """
    Binary tree of nodes in pre-order (node, left subtree, right subtree).

    Left children turn by +angle_divergence degrees about branching_axis,
    right children by -angle_divergence. The axis stays fixed for the whole
    tree, so the fork lies in one plane.
    """
    div = np.radians(angle_divergence)
    nodes = []
    stack = [root]

    while stack:
        node = stack.pop()
        nodes.append(node)
        if node.depth >= max_depth:
            continue

        tip = node.tip
        children = [
            BranchNode(
                position=tip,
                direction=normalize(rotate_about_axis(node.direction, branching_axis, sign * div)),
                length=node.length * branch_ratio,
                depth=node.depth + 1,
            )
            for sign in (1.0, -1.0)
        ]
        # right pushed first so the left subtree is emitted first
        stack.append(children[1])
        stack.append(children[0])

    return nodes


def build_drepanium_nodes(
    root: BranchNode,
    max_depth: int,
    branch_ratio: float,
    spiral_angle: float,
    tilt_deg: float = 15.0,
) -> List[BranchNode]:
    """Chain of max_depth + 1 nodes, each child spun and tilted from its parent."""
    nodes = [root]
    node = root

    while node.depth < max_depth:
        direction = normalize(node.direction)
        spun = rotate_about_axis(direction, direction, np.radians(spiral_angle))

        helper = Y_AXIS if abs(node.direction[1]) < 0.9 else X_AXIS
        perpendicular = normalize(np.cross(helper, node.direction))
        child_dir = normalize(rotate_about_axis(spun, perpendicular, -np.radians(tilt_deg)))

        node = BranchNode(
            position=node.tip,
            direction=child_dir,
            length=node.length * branch_ratio,
            depth=node.depth + 1,
        )
        nodes.append(node)

    return nodes


def generate_dichasium(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[BranchPoint]:
    """
    Binary cyme rooted at the axis top.

    The root points along the top sample's normal with length
    branch_length_top; children fork about the top sample's binormal.

    Returns:
    --------
    List[BranchPoint] with 2^(depth+1) - 1 entries, pre-order.

    Raises:
    -------
    RecursionLimitError
        If recursion_depth exceeds config.max_recursion_depth
    """
    max_depth = resolve_depth(params.recursion_depth, config.dichasium_depth, config)
    ratio = config.dichasium_branch_ratio if params.branch_ratio is None else params.branch_ratio
    divergence = (
        config.dichasium_angle_divergence
        if params.angle_divergence is None else params.angle_divergence
    )
    logger.debug("dichasium depth=%d ratio=%.3f divergence=%.1f", max_depth, ratio, divergence)

    root, sample = _root_node(params, axis)
    nodes = build_dichasium_nodes(root, max_depth, ratio, divergence, sample.binormal)
    return _nodes_to_branch_points(nodes, max_depth, params, config.dichasium_scale_falloff, config)


def generate_drepanium(
    params: InflorescenceParams,
    axis: AxisCurve,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[BranchPoint]:
    """
    Helicoid chain rooted at the axis top, depth + 1 flowers, oldest first.

    Ages are the native 1 - depth / max_depth; age_distribution is not
    applied to a drepanium.
    """
    max_depth = resolve_depth(params.recursion_depth, config.drepanium_depth, config)
    ratio = config.drepanium_branch_ratio if params.branch_ratio is None else params.branch_ratio
    logger.debug("drepanium depth=%d ratio=%.3f", max_depth, ratio)

    root, _ = _root_node(params, axis)
    nodes = build_drepanium_nodes(
        root, max_depth, ratio, params.rotation_angle, config.drepanium_tilt_deg
    )
    return _nodes_to_branch_points(
        nodes, max_depth, params, config.drepanium_scale_falloff, config, remap_age=False
    )
