"""Tests for geometry utilities."""

import numpy as np
import pytest
from shapely.geometry import Polygon

from pointfill.errors import InvalidBoundary
from pointfill.geometry import (
    Point,
    Viewport,
    boundary_coordinates,
    buffer_polygon,
    contained,
    make_polygon,
    rotate,
)

UNIT_SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]


def test_closing_vertex_dropped():
    """A repeated first vertex at the end is not counted."""
    xy = boundary_coordinates(UNIT_SQUARE + [(0, 0)])
    assert xy.shape == (4, 2)


def test_accepts_points_and_polygons():
    """Point objects and shapely polygons both work as boundaries."""
    from_points = boundary_coordinates([Point(0, 0), Point(1, 0), Point(0, 1)])
    assert from_points.shape == (3, 2)

    from_polygon = boundary_coordinates(Polygon(UNIT_SQUARE))
    assert from_polygon.shape == (4, 2)


@pytest.mark.parametrize("boundary", [
    [],
    [(0, 0), (1, 1)],
    [(0, 0), (1, 0), (0, 0)],
    [(0, 0), (0, 0), (1, 1), (1, 1)],
    [(0, 0), (1, 0), (float("nan"), 1)],
    [(0, 0, 0), (1, 0, 0), (1, 1, 0)],
    None,
])
def test_invalid_boundaries(boundary):
    """Fewer than 3 vertices or malformed input raises InvalidBoundary."""
    with pytest.raises(InvalidBoundary):
        make_polygon(boundary)


def test_invalid_boundary_is_value_error():
    with pytest.raises(ValueError):
        make_polygon([(0, 0)])


def test_buffer_zero_is_identity():
    polygon = make_polygon(UNIT_SQUARE)
    assert buffer_polygon(polygon, 0) is polygon


def test_buffer_expands_and_contracts():
    """Positive distances grow the polygon, negative ones shrink it."""
    expanded = buffer_polygon(UNIT_SQUARE, 0.1)
    contracted = buffer_polygon(UNIT_SQUARE, -0.1)

    assert expanded.area > 1.0
    assert contracted.area == pytest.approx(0.64)
    assert contracted.bounds == pytest.approx((0.1, 0.1, 0.9, 0.9))


def test_buffer_collapse_gives_empty():
    """Contracting past the inradius yields an empty geometry, not an error."""
    assert buffer_polygon(UNIT_SQUARE, -0.6).is_empty


def test_rotate_zero_returns_copy():
    points = np.array([[0.2, 0.3], [0.7, 0.1]])
    rotated = rotate(points, 0, 1.0)

    assert rotated is not points
    np.testing.assert_array_equal(rotated, points)


def test_rotate_quarter_turn_about_center():
    rotated = rotate([(1.0, 0.5)], 90, 1.0)
    np.testing.assert_allclose(rotated, [[0.5, 1.0]], atol=1e-12)


def test_rotate_compensates_aspect_ratio():
    """On a 2:1 viewport a quarter turn maps x distance to half the y distance."""
    rotated = rotate([(1.0, 0.5)], 90, 2.0)
    np.testing.assert_allclose(rotated, [[0.5, 1.5]], atol=1e-12)


def test_rotate_keeps_center_fixed():
    rotated = rotate([(0.5, 0.5)], 37, 3.0)
    np.testing.assert_allclose(rotated, [[0.5, 0.5]], atol=1e-12)


def test_contained_includes_edge():
    """Points on the boundary count as contained."""
    polygon = make_polygon(UNIT_SQUARE)
    mask = contained(polygon, [(0.5, 0.5), (1.0, 0.5), (0.0, 0.0), (1.5, 0.5)])
    assert mask.tolist() == [True, True, True, False]


def test_contained_empty_inputs():
    polygon = make_polygon(UNIT_SQUARE)
    assert contained(polygon, np.empty((0, 2))).shape == (0,)

    empty = buffer_polygon(UNIT_SQUARE, -1)
    assert not contained(empty, [(0.5, 0.5)]).any()


def test_viewport_from_points():
    viewport = Viewport.from_points([(10, 20), (50, 20), (50, 40), (10, 40)])

    assert (viewport.x, viewport.y, viewport.width, viewport.height) == (10, 20, 40, 20)
    assert viewport.aspect_ratio == 2.0
    assert viewport.snpc == 20


def test_viewport_flips_y():
    """SVG y points down, normalized y points up."""
    viewport = Viewport(0, 0, 100, 50)
    normalized = viewport.to_normalized([(0, 0), (100, 50), (25, 10)])

    np.testing.assert_allclose(normalized, [[0, 1], [1, 0], [0.25, 0.8]])
    np.testing.assert_allclose(viewport.to_user(normalized), [[0, 0], [100, 50], [25, 10]])


def test_viewport_rejects_zero_size():
    with pytest.raises(InvalidBoundary):
        Viewport.from_points([(0, 0), (0, 10), (0, 5)])
