# mini_bloom - Procedural Inflorescence Skeletons
"""
MINI-BLOOM: Procedural Inflorescence Skeletons
==============================================

This package provides:
- Curve and surface math (Bezier, Catmull-Rom, B-spline, sketch lifting)
- Arc-length parameterized axes with a local frame
- Phyllotaxis layouts (golden angle, whorls, Vogel spiral)
- Eight branching patterns producing flower attachment points
- Presets, random exploration and Plotly visualization

ARCHITECTURE:
-------------
    kernel/         Pattern-agnostic geometry core
    model.py        PatternType, InflorescenceParams, BranchPoint, Inflorescence
    config.py       GeneratorConfig (tuned constants, depth ceiling)
    generative/     Pattern generators (racemose, cymose, compound)
    presets.py      Named botanical parameter sets
    explore.py      Random sampling & batch evaluation (pandas)
    viz/            Visualization (Plotly)
"""

from .kernel import AxisCurve, AxisSample, PreconditionError, RecursionLimitError
from .config import DEFAULT_CONFIG, GeneratorConfig
from .model import BranchPoint, Inflorescence, InflorescenceParams, PatternType
from .generative import generate_branch_points, generate_inflorescence
from .presets import PRESETS, get_preset, preset_names

__version__ = "0.1.0"

__all__ = [
    'AxisCurve',
    'AxisSample',
    'PreconditionError',
    'RecursionLimitError',
    'DEFAULT_CONFIG',
    'GeneratorConfig',
    'BranchPoint',
    'Inflorescence',
    'InflorescenceParams',
    'PatternType',
    'generate_branch_points',
    'generate_inflorescence',
    'PRESETS',
    'get_preset',
    'preset_names',
]
