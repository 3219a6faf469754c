"""
Tests for the SVG and matplotlib drawing surfaces.
"""

import matplotlib
matplotlib.use("Agg")
from matplotlib.figure import Figure
import pytest

from chargefield.fieldlines import (
    FieldConfig,
    FieldScene,
    MatplotlibSurface,
    SvgSurface,
    build_field,
    compose_scene,
    render_scene,
)


@pytest.fixture(scope="module")
def scene():
    cfg = FieldConfig()
    return compose_scene(build_field(cfg), 5, cfg)


def test_svg_output(tmp_path, scene):
    path = tmp_path / "field.svg"
    surface = SvgSurface(path, width=600, height=600)
    surface.clear()
    render_scene(scene, surface)

    text = path.read_text(encoding="utf-8")
    assert text.startswith("<svg")
    assert text.rstrip().endswith("</svg>")
    assert text.count('r="5"') == 4
    assert text.count(">+q</text>") == 2
    assert text.count(">-q</text>") == 2
    assert text.count("<path") == sum(1 for line in scene.lines if len(line) >= 2)


def test_svg_translates_to_canvas_center(tmp_path):
    surface = SvgSurface(tmp_path / "one.svg", width=400, height=300)
    surface.draw_charge_marker((0.0, 0.0), True)
    assert 'cx="200" cy="150"' in surface.elements[0]
    assert 'fill="red"' in surface.elements[0]


def test_svg_invalid_extents(tmp_path):
    with pytest.raises(ValueError):
        SvgSurface(tmp_path / "x.svg", width=0)


def test_matplotlib_surface(scene):
    fig = Figure()
    ax = fig.add_subplot(111)
    surface = MatplotlibSurface(ax)
    surface.clear()
    render_scene(scene, surface)
    assert len(ax.collections) == 4
    assert len(ax.texts) == 4
    drawn_lines = sum(1 for line in scene.lines if len(line) >= 2)
    assert len(ax.lines) == drawn_lines + len(scene.samples)


def test_matplotlib_redraw_clears_previous_pass():
    fig = Figure()
    ax = fig.add_subplot(111)
    fs = FieldScene(MatplotlibSurface(ax))
    fs.on_redraw_requested()
    n = len(ax.lines)
    fs.on_redraw_requested()
    assert len(ax.lines) == n
