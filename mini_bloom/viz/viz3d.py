# mini_bloom/viz/viz3d.py
"""
3D VISUALIZATION: Interactive Inflorescence Viewer
==================================================

PURPOSE:
--------
Draw a generated inflorescence skeleton with Plotly:
- the main axis (and every sub-axis of a compound pattern) as polylines
- every pedicel as a segment from its base to its flower
- flowers as markers sized by flower_scale and coloured by age

Export to HTML for sharing, or show inline in a notebook.
"""

import logging
from typing import List, Literal, Optional

import numpy as np
import plotly.graph_objects as go

from ..model import BranchPoint, Inflorescence

logger = logging.getLogger(__name__)


def _segments(points: List[BranchPoint]):
    """Pedicel segments as x, y, z lists separated by None."""
    xs, ys, zs = [], [], []
    for bp in points:
        if bp.length <= 0.0:
            continue
        base = bp.base
        xs.extend([base[0], bp.position[0], None])
        ys.extend([base[1], bp.position[1], None])
        zs.extend([base[2], bp.position[2], None])
    return xs, ys, zs


def create_inflorescence_figure(
    inflorescence: Inflorescence,
    title: str = "Inflorescence",
    color_by: Literal['none', 'age', 'scale'] = 'age',
    show_pedicels: bool = True,
    marker_size: float = 10.0,
) -> go.Figure:
    """
    Create a Plotly figure for an inflorescence skeleton.

    Parameters:
    -----------
    inflorescence : Inflorescence
        Result of generate_inflorescence()

    title : str
        Plot title

    color_by : str
        How to colour flowers:
        - 'none': all flowers the same colour
        - 'age': bud (light) to bloom (dark)
        - 'scale': by flower_scale

    show_pedicels : bool
        Whether to draw pedicel segments

    marker_size : float
        Marker size of a flower with flower_scale 1

    Returns:
    --------
    go.Figure
    """
    fig = go.Figure()

    # =========================================================================
    # AXES
    # =========================================================================

    for level, node in enumerate(inflorescence.walk()):
        pts = node.axis.points
        fig.add_trace(go.Scatter3d(
            x=pts[:, 0], y=pts[:, 1], z=pts[:, 2],
            mode='lines',
            line=dict(color='darkgreen', width=6 if level == 0 else 3),
            name='Axis' if level == 0 else 'Sub-axis',
            showlegend=level <= 1,
            hoverinfo='skip',
        ))

    # =========================================================================
    # PEDICELS
    # =========================================================================

    if show_pedicels:
        stalks = list(inflorescence.branch_points)
        for node in inflorescence.walk():
            stalks.extend(node.rays)
        xs, ys, zs = _segments(stalks)
        if xs:
            fig.add_trace(go.Scatter3d(
                x=xs, y=ys, z=zs,
                mode='lines',
                line=dict(color='olivedrab', width=3),
                name='Pedicels',
                hoverinfo='skip',
            ))

    # =========================================================================
    # FLOWERS
    # =========================================================================

    points = inflorescence.branch_points
    if points:
        pos = np.array([bp.position for bp in points])
        ages = np.array([bp.age for bp in points])
        scales = np.array([bp.flower_scale for bp in points])
        texts = [
            f"Flower {i}: age={bp.age:.2f}, scale={bp.flower_scale:.2f}, L={bp.length:.2f}"
            for i, bp in enumerate(points)
        ]

        marker = dict(size=np.maximum(scales, 0.05) * marker_size, line=dict(width=1, color='black'))
        if color_by == 'age':
            marker.update(color=ages, colorscale='RdPu', cmin=0.0, cmax=1.0,
                          colorbar=dict(title='Age'))
        elif color_by == 'scale':
            marker.update(color=scales, colorscale='Viridis', colorbar=dict(title='Scale'))
        else:
            marker.update(color='orchid')

        fig.add_trace(go.Scatter3d(
            x=pos[:, 0], y=pos[:, 1], z=pos[:, 2],
            mode='markers',
            marker=marker,
            name='Flowers',
            text=texts,
            hoverinfo='text',
        ))

    # =========================================================================
    # LAYOUT
    # =========================================================================

    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=dict(
            xaxis=dict(title='X'),
            yaxis=dict(title='Y (up)'),
            zaxis=dict(title='Z'),
            aspectmode='data',
            camera=dict(
                up=dict(x=0, y=1, z=0),
                eye=dict(x=1.6, y=0.8, z=1.6),
            ),
        ),
        showlegend=True,
        legend=dict(x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=40, b=0),
    )

    return fig


def plot_inflorescence_3d(
    inflorescence: Inflorescence,
    title: str = "Inflorescence",
    outpath: Optional[str] = None,
    show: bool = True,
    **kwargs
) -> go.Figure:
    """
    Create and optionally display/save an inflorescence figure.

    Parameters:
    -----------
    inflorescence, title:
        See create_inflorescence_figure()

    outpath : Optional[str]
        If provided, save as HTML file

    show : bool
        Whether to display the figure (default: True)

    Example:
    --------
    >>> from mini_bloom import generate_inflorescence, get_preset
    >>> result = generate_inflorescence(get_preset('lily-raceme'))
    >>> fig = plot_inflorescence_3d(result, outpath="artifacts/lily.html", show=False)
    """
    fig = create_inflorescence_figure(inflorescence, title=title, **kwargs)

    if outpath:
        import os
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.write_html(outpath)
        logger.info("3D visualization saved to: %s", outpath)

    if show:
        fig.show()

    return fig
