# mini_bloom/kernel - Pattern-agnostic geometry core
"""
KERNEL: THE PATTERN-AGNOSTIC FOUNDATION
=======================================

This package contains the mathematics every inflorescence pattern relies
on, without knowing anything about botany:

    vector.py       numpy helpers: normalization, rotations, interpolation
    bezier.py       quadratic / cubic Bezier segments
    curves.py       Catmull-Rom splines through control points
    bspline.py      Cox-de Boor basis and tensor-product surfaces
    reconstruct.py  2D sketch -> constant-curvature 3D curve
    axis.py         arc-length parameterized axis with a local frame
    phyllotaxis.py  golden-angle and whorl layouts
    errors.py       PreconditionError, RecursionLimitError

The pattern generators (raceme, umbel, dichasium, ...) live in
mini_bloom.generative and only talk to this package through AxisCurve
samples and the phyllotaxis functions.
"""

from .errors import PreconditionError, RecursionLimitError
from .axis import AxisCurve, AxisSample
from .phyllotaxis import GOLDEN_ANGLE

__all__ = ['PreconditionError', 'RecursionLimitError', 'AxisCurve', 'AxisSample', 'GOLDEN_ANGLE']
