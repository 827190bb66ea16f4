# mini_bloom/viz - Visualization Tools
"""
VIZ: Visualization for Inflorescence Skeletons
==============================================

- viz3d: interactive 3D view of axes, pedicels and flowers (Plotly)
"""

from .viz3d import plot_inflorescence_3d, create_inflorescence_figure

__all__ = ['plot_inflorescence_3d', 'create_inflorescence_figure']
