# tests/test_viz_smoke.py
"""
Smoke tests for the Plotly viewer: figures build for simple and
compound results and can be written to HTML.
"""

import plotly.graph_objects as go
import pytest

from mini_bloom import generate_inflorescence, get_preset
from mini_bloom.model import InflorescenceParams
from mini_bloom.viz import create_inflorescence_figure, plot_inflorescence_3d


def trace_names(fig):
    return [t.name for t in fig.data]


def test_simple_figure():
    result = generate_inflorescence(get_preset('lily-raceme'))
    fig = create_inflorescence_figure(result, title="Lily")

    assert isinstance(fig, go.Figure)
    names = trace_names(fig)
    assert 'Axis' in names
    assert 'Pedicels' in names
    assert 'Flowers' in names

    flowers = fig.data[names.index('Flowers')]
    assert len(flowers.x) == result.n_flowers


def test_compound_figure_draws_sub_axes():
    result = generate_inflorescence(get_preset('astilbe-plume'))
    fig = create_inflorescence_figure(result, color_by='scale')

    assert result.children
    assert trace_names(fig).count('Sub-axis') == len(list(result.walk())) - 1


def test_sessile_spike_has_no_pedicel_trace():
    result = generate_inflorescence(get_preset('lavender-spike'))
    fig = create_inflorescence_figure(result, color_by='none')
    assert 'Pedicels' not in trace_names(fig)


def test_empty_inflorescence_figure():
    result = generate_inflorescence(InflorescenceParams(branch_count=0))
    fig = create_inflorescence_figure(result)
    assert trace_names(fig) == ['Axis']


def test_plot_writes_html(tmp_path):
    outpath = tmp_path / "viz" / "cherry.html"
    result = generate_inflorescence(get_preset('cherry-umbel'))

    fig = plot_inflorescence_3d(result, outpath=str(outpath), show=False)

    assert isinstance(fig, go.Figure)
    assert outpath.exists()
    assert outpath.stat().st_size > 0
