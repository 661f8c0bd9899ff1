"""Tests for SVG input and output."""

from xml.etree import ElementTree as ET

import numpy as np
import pytest

from pointfill.geometry import Viewport
from pointfill.renderable import PatternGroup, PointLayer
from pointfill.style import PatternStyle
from pointfill.svg_io import (
    create_svg_document,
    extract_shapes_from_svg,
    marker_element,
    outline_element,
    path_to_boundaries,
    render_layer,
    render_pattern,
)

SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100" width="200" height="100">
  <defs>
    <rect x="0" y="0" width="5" height="5"/>
  </defs>
  <g>
    <rect x="10" y="10" width="40" height="20"/>
    <circle cx="100" cy="50" r="10"/>
    <polygon points="150,10 190,10 170,40"/>
    <polyline points="0,0 5,5"/>
  </g>
</svg>'''


def test_extract_shapes():
    shapes, metadata = extract_shapes_from_svg(SVG)

    # rect, circle, polygon; the defs rect and the 2-point polyline are skipped
    assert len(shapes) == 3
    assert metadata == {'viewBox': '0 0 200 100', 'width': '200', 'height': '100'}

    rect = shapes[0]
    assert [(p.x, p.y) for p in rect] == [(10, 10), (50, 10), (50, 30), (10, 30)]


def test_path_subpaths():
    """Each subpath of a path becomes its own boundary."""
    boundaries = path_to_boundaries("M0,0 L10,0 L10,10 Z M20,20 L30,20 L30,30 Z")

    assert len(boundaries) == 2
    assert (boundaries[1][0].x, boundaries[1][0].y) == (20, 20)


def test_path_curves_are_sampled():
    boundaries = path_to_boundaries("M0,0 C10,0 10,10 0,10 Z")

    assert len(boundaries) == 1
    assert len(boundaries[0]) > 4


def test_empty_path():
    assert path_to_boundaries("") == []


def test_render_layer():
    layer = PointLayer("interior", np.array([[0.25, 0.5], [0.75, 0.5]]), 0.1, PatternStyle())
    svg = render_layer(layer, Viewport(0, 0, 100, 50))

    assert svg.count("<circle") == 2
    # size is relative to the shorter side: 0.1 * 50 / 2
    assert 'r="2.50"' in svg
    assert 'cx="25.00" cy="25.00"' in svg


def test_render_linetypes():
    points = np.array([[0.5, 0.5]])
    viewport = Viewport(0, 0, 10, 10)

    dashed = render_layer(PointLayer("interior", points, 0.2, PatternStyle(linetype="dashed")), viewport)
    assert 'stroke-dasharray="4,4"' in dashed

    blank = render_layer(PointLayer("interior", points, 0.2, PatternStyle(linetype="blank")), viewport)
    assert 'stroke="none"' in blank


@pytest.mark.parametrize("shape, tag", [
    ("circle", "<circle"),
    ("square", "<rect"),
    ("diamond", "<polygon"),
    ("triangle", "<polygon"),
    ("cross", "<path"),
    ("plus", "<path"),
])
def test_marker_shapes(shape, tag):
    assert marker_element(shape, 5, 5, 1).startswith(tag)


def test_unknown_marker_shape():
    with pytest.raises(ValueError):
        marker_element("star", 0, 0, 1)


def test_render_empty_group():
    assert render_pattern(PatternGroup.empty(), Viewport(0, 0, 10, 10)) == ''


def test_document_is_well_formed():
    layer = PointLayer("interior", np.array([[0.5, 0.5]]), 0.2, PatternStyle(fill='"odd"'))
    viewport = Viewport(0, 0, 10, 10)
    shapes, _ = extract_shapes_from_svg(SVG)

    document = create_svg_document(
        [render_pattern(PatternGroup((layer,)), viewport), outline_element(shapes[0])],
        viewbox="0 0 10 10",
    )
    root = ET.fromstring(document.split('?>', 1)[1])

    assert root.get('viewBox') == "0 0 10 10"
    assert root.find('{http://www.w3.org/2000/svg}g').get('fill') == '"odd"'


def test_open_path_keeps_last_vertex():
    """A subpath without Z still has all of its vertices."""
    boundaries = path_to_boundaries("M0,0 L10,0 L10,10 L0,10")

    assert len(boundaries) == 1
    assert [(p.x, p.y) for p in boundaries[0]] == [(0, 0), (10, 0), (10, 10), (0, 10)]


def test_unit_suffixed_lengths():
    svg = '''<svg xmlns="http://www.w3.org/2000/svg">
      <rect x="1mm" y="2" width="10mm" height="5px"/>
    </svg>'''
    shapes, _ = extract_shapes_from_svg(svg)

    assert [(p.x, p.y) for p in shapes[0]] == [(1, 2), (11, 2), (11, 7), (1, 7)]


def test_unreadable_length_skips_shape():
    """A shape with a non-numeric length is skipped, the others survive."""
    svg = '''<svg xmlns="http://www.w3.org/2000/svg">
      <rect x="0" y="0" width="auto" height="5"/>
      <circle cx="10" cy="10" r="4"/>
    </svg>'''
    shapes, _ = extract_shapes_from_svg(svg)

    assert len(shapes) == 1
