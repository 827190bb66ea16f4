# mini_bloom/model.py
"""
INFLORESCENCE MODEL: Parameters and Branch Points
=================================================

PURPOSE:
--------
This module defines the data that flows in and out of the generators:
- PatternType: which of the eight branching patterns to build
- InflorescenceParams: the botanical knobs (counts, angles, lengths, scales)
- BranchPoint: one flower attachment point, the sole output entity
- BranchNode: internal tree/chain node used by the recursive patterns

BOTANICAL CONTEXT:
------------------
An inflorescence is the flowering part of a plant. Two families matter for
the age of each flower:

    INDETERMINATE (raceme, spike, umbel, corymb):
        the axis keeps growing, so the lowest/outermost flowers are oldest

    DETERMINATE (dichasium, drepanium):
        the axis ends in a flower, which is the oldest; younger flowers
        appear on side branches

Compound patterns (compound raceme, compound umbel) repeat a simple
pattern on each of its own branches.
"""

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from .kernel.axis import AxisCurve
from .kernel.errors import PreconditionError


class PatternType(str, Enum):
    RACEME = "Raceme"
    SPIKE = "Spike"
    UMBEL = "Umbel"
    CORYMB = "Corymb"
    DICHASIUM = "Dichasium"
    DREPANIUM = "Drepanium"
    COMPOUND_RACEME = "CompoundRaceme"
    COMPOUND_UMBEL = "CompoundUmbel"

    @classmethod
    def parse(cls, value) -> "PatternType":
        """
        Accept a PatternType, its value ("CompoundRaceme") or a loose name
        ("compound_raceme", "compound raceme", "RACEME").
        """
        if isinstance(value, cls):
            return value
        key = str(value).replace("_", "").replace(" ", "").replace("-", "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise PreconditionError(
            f"Unknown pattern: {value!r}. Available: {[m.value for m in cls]}"
        )

    @property
    def is_recursive(self) -> bool:
        return self in (
            PatternType.DICHASIUM,
            PatternType.DREPANIUM,
            PatternType.COMPOUND_RACEME,
            PatternType.COMPOUND_UMBEL,
        )

    @property
    def is_compound(self) -> bool:
        return self in (PatternType.COMPOUND_RACEME, PatternType.COMPOUND_UMBEL)


@dataclass(frozen=True)
class InflorescenceParams:
    """
    Parameters defining an inflorescence.

    Axis:
    -----
    pattern : PatternType
        Branching pattern (a plain string such as "umbel" is accepted)
    axis_length : float
        Length of the main axis
    axis_curve_amount : float
        0 = straight axis, 1 = strongly bent (quadratic arc)
    axis_curve_direction : tuple
        Direction the axis bends toward

    Branches:
    ---------
    branch_count : int
        Number of flower positions on the axis (simple patterns)
    angle_top, angle_bottom : float
        Branch angle in degrees at the top / bottom of the axis
    branch_length_top, branch_length_bottom : float
        Pedicel (flower stalk) length at the top / bottom
    rotation_angle : float
        Spiral increment between successive branches, degrees
        (137.5 golden angle, 180 alternate, 360/n even)

    Flowers:
    --------
    flower_size_top, flower_size_bottom : float
        Flower scale at the top / bottom
    age_distribution : float
        0 = all buds, 0.5 = natural age gradient, 1 = all in bloom

    Recursive patterns only:
    ------------------------
    recursion_depth : Optional[int]
        Tree/chain depth (dichasium, drepanium) or nesting depth (compound)
    branch_ratio : Optional[float]
        Child length / parent length
    angle_divergence : Optional[float]
        Dichasium fork half-angle, degrees

    None means "use the pattern's default" (see GeneratorConfig).
    """
    pattern: PatternType = PatternType.RACEME
    axis_length: float = 10.0
    branch_count: int = 12
    angle_top: float = 45.0
    angle_bottom: float = 60.0
    branch_length_top: float = 0.5
    branch_length_bottom: float = 1.5
    rotation_angle: float = 137.5
    flower_size_top: float = 0.8
    flower_size_bottom: float = 1.0
    recursion_depth: Optional[int] = None
    branch_ratio: Optional[float] = None
    angle_divergence: Optional[float] = None
    age_distribution: float = 0.5
    axis_curve_amount: float = 0.0
    axis_curve_direction: Tuple[float, float, float] = (0.0, 0.0, 1.0)

    def __post_init__(self):
        object.__setattr__(self, "pattern", PatternType.parse(self.pattern))
        object.__setattr__(
            self, "axis_curve_direction", tuple(float(c) for c in self.axis_curve_direction)
        )

        if self.branch_count < 0:
            raise PreconditionError(f"branch_count must be >= 0, got {self.branch_count}")
        if self.axis_length < 0:
            raise PreconditionError(f"axis_length must be >= 0, got {self.axis_length}")
        for name in ("flower_size_top", "flower_size_bottom"):
            if getattr(self, name) <= 0:
                raise PreconditionError(f"{name} must be > 0, got {getattr(self, name)}")
        if self.recursion_depth is not None and self.recursion_depth < 0:
            raise PreconditionError(
                f"recursion_depth must be >= 0, got {self.recursion_depth}"
            )
        if len(self.axis_curve_direction) != 3:
            raise PreconditionError(
                f"axis_curve_direction must have 3 components, got {self.axis_curve_direction}"
            )

    def replace(self, **changes) -> "InflorescenceParams":
        """Copy with some fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["pattern"] = self.pattern.value
        d["axis_curve_direction"] = list(self.axis_curve_direction)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InflorescenceParams":
        """Build params from a plain dict, ignoring unknown keys (e.g. a UI's 'enabled')."""
        known = cls.__dataclass_fields__.keys()
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class BranchPoint:
    """
    A flower attachment point.

    Attributes:
    -----------
    position : np.ndarray (3,)
        Flower base, i.e. the tip of the pedicel
    direction : np.ndarray (3,)
        Unit vector the pedicel/flower points along
    length : float
        Pedicel length (0 for sessile flowers)
    flower_scale : float
        Size multiplier (1 = nominal)
    age : float
        0 = bud, 1 = full bloom / oldest

    Notes:
    ------
    The pedicel runs from `base` (on the parent axis) to `position`.
    """
    position: np.ndarray
    direction: np.ndarray
    length: float
    flower_scale: float
    age: float

    @property
    def base(self) -> np.ndarray:
        """Where the pedicel leaves the parent axis."""
        return self.position - self.direction * self.length

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": [float(c) for c in self.position],
            "direction": [float(c) for c in self.direction],
            "length": float(self.length),
            "flower_scale": float(self.flower_scale),
            "age": float(self.age),
        }


@dataclass(frozen=True)
class BranchNode:
    """Internal node of a dichasium tree or drepanium chain."""
    position: np.ndarray
    direction: np.ndarray
    length: float
    depth: int

    @property
    def tip(self) -> np.ndarray:
        return self.position + self.direction * self.length


@dataclass
class Inflorescence:
    """
    A generated inflorescence skeleton.

    Attributes:
    -----------
    params : InflorescenceParams
    axis : AxisCurve
        Main axis, in the frame of the top-level result
    branch_points : List[BranchPoint]
        Every flower, flattened across all nesting levels
    rays : List[BranchPoint]
        Compound patterns only: the primary branches that carry the
        sub-inflorescences (they bear no flower of their own)
    children : List[Inflorescence]
        Compound patterns only: one placed sub-inflorescence per ray
    """
    params: InflorescenceParams
    axis: AxisCurve
    branch_points: List[BranchPoint]
    rays: List[BranchPoint] = field(default_factory=list)
    children: List["Inflorescence"] = field(default_factory=list)

    @property
    def n_flowers(self) -> int:
        return len(self.branch_points)

    @property
    def is_compound(self) -> bool:
        return bool(self.children)

    def walk(self) -> Iterator["Inflorescence"]:
        """Yield this inflorescence and every nested one, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def transformed(self, scale: float, rotation: np.ndarray, translation) -> "Inflorescence":
        """
        Copy placed by p -> translation + rotation @ (scale * p).

        Directions are rotated and renormalized; pedicel lengths and
        flower scales are multiplied by `scale`.
        """
        translation = np.asarray(translation, dtype=float)

        def place(bp: BranchPoint) -> BranchPoint:
            direction = rotation @ bp.direction
            return BranchPoint(
                position=translation + rotation @ (bp.position * scale),
                direction=direction / np.linalg.norm(direction),
                length=bp.length * scale,
                flower_scale=bp.flower_scale * scale,
                age=bp.age,
            )

        axis_pts = translation + (self.axis.points * scale) @ rotation.T
        return Inflorescence(
            params=self.params,
            axis=AxisCurve(axis_pts),
            branch_points=[place(bp) for bp in self.branch_points],
            rays=[place(bp) for bp in self.rays],
            children=[c.transformed(scale, rotation, translation) for c in self.children],
        )
