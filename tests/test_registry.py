"""Tests for the pattern table."""

import pytest

from pointfill.errors import UnknownPattern
from pointfill.patterns import PatternTable, default_patterns, make_pattern
from pointfill.renderable import PatternGroup
from pointfill.style import PatternStyle


def test_default_table_has_points():
    table = default_patterns()

    assert "points" in table
    assert table.get("points") is make_pattern
    assert table.names() == ["points"]
    assert len(table) == 1


def test_lookup_is_normalized():
    table = default_patterns()
    assert table.get("POINTS") is table.get("points")


def test_invoke_through_table():
    """Generators share the (style, boundary, aspect_ratio, legend_mode) signature."""
    generator = default_patterns().get("points")
    group = generator(PatternStyle(spacing=0.1), [(0, 0), (1, 0), (1, 1), (0, 1)], 1.0, False)

    assert isinstance(group, PatternGroup)
    assert not group.is_empty


def test_unknown_pattern():
    table = default_patterns()

    with pytest.raises(UnknownPattern):
        table.get("stripes")
    with pytest.raises(KeyError):
        table.get("stripes")


def test_register_and_unregister():
    table = PatternTable()

    def nothing(style, boundary, aspect_ratio, legend_mode):
        return PatternGroup.empty()

    table.register("nothing-at-all", nothing)
    assert "nothing_at_all" in table
    assert list(table) == ["nothing_at_all"]

    table.unregister("nothing-at-all")
    assert "nothing_at_all" not in table
    assert len(table) == 0


def test_register_requires_callable():
    with pytest.raises(TypeError):
        PatternTable().register("broken", "not a function")


def test_tables_are_independent():
    """Changing one table never leaks into another."""
    table = default_patterns()
    table.unregister("points")

    assert "points" in default_patterns()
