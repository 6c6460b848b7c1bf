"""Tests for types.py — geometry helpers, connector derivations and plan serialization."""

from __future__ import annotations

import json
import math

import pytest

from compose_diagram.types import (
    MIN_EXTENT,
    Anchor,
    Bounds,
    ConnectorPlan,
    ConnectorStyle,
    DiagramPlan,
    DrawConnector,
    DrawPlaceholder,
    FillBackground,
    Node,
    Point,
)


def make_connector(start: Point, end: Point) -> ConnectorPlan:
    return ConnectorPlan(
        from_id="a",
        to_id="b",
        start=start,
        end=end,
        style=ConnectorStyle.SIDE_BY_SIDE,
        start_anchor=Anchor.MIDDLE,
        end_anchor=Anchor.MIDDLE,
    )


class TestNode:
    def test_links_coerced_to_frozenset(self):
        node = Node(id="api", links=["db", "cache", "db"])  # type: ignore[arg-type]
        assert node.links == frozenset({"db", "cache"})

    def test_hashable_and_comparable(self):
        assert Node(id="a", links=frozenset({"b"})) == Node(id="a", links=frozenset({"b"}))
        assert len({Node(id="a"), Node(id="a")}) == 1

    def test_immutable(self):
        node = Node(id="a")
        with pytest.raises(AttributeError):
            node.id = "b"  # type: ignore[misc]


class TestBounds:
    def test_edges_and_centre(self):
        b = Bounds(10, 20, 30, 40)
        assert (b.left, b.right, b.top, b.bottom) == (10, 40, 20, 60)
        assert (b.center_x, b.center_y) == (25, 40)

    def test_offset(self):
        assert Bounds(0, 0, 5, 5).offset(2, 3) == Bounds(2, 3, 5, 5)

    def test_intersects(self):
        a = Bounds(0, 0, 10, 10)
        assert a.intersects(Bounds(5, 5, 10, 10))
        assert a.intersects(a)
        assert not a.intersects(Bounds(10, 0, 10, 10)), "shared edge is not an overlap"
        assert not a.intersects(Bounds(0, 20, 10, 10))


class TestConnectorGeometry:
    def test_length_and_angle_from_endpoints(self):
        c = make_connector(Point(0, 0), Point(3, 4))
        assert c.length == 5
        assert c.angle == pytest.approx(math.degrees(math.atan2(4, 3)))

    def test_rotated_rect_centred_on_segment(self):
        c = make_connector(Point(0, 0), Point(10, 0))
        rect = c.as_rotated_rect(2)
        assert rect.center == Point(5, 0)
        assert rect.length == 10
        assert rect.thickness == 2
        assert rect.angle == pytest.approx(0)

    def test_rotated_rect_thickness_clamped(self):
        assert make_connector(Point(0, 0), Point(5, 5)).as_rotated_rect(0.0).thickness == MIN_EXTENT

    def test_line_box_flips(self):
        """A line running up and to the left flips both axes inside its box."""
        box = make_connector(Point(10, 10), Point(0, 0)).line_box()
        assert (box.x, box.y, box.width, box.height) == (0, 0, 10, 10)
        assert box.flip_h and box.flip_v

    def test_line_box_clamps_flat_lines(self):
        """Horizontal and vertical lines keep a non-degenerate bounding box."""
        flat = make_connector(Point(0, 5), Point(20, 5)).line_box()
        assert flat.height == MIN_EXTENT
        assert not flat.flip_h and not flat.flip_v
        upright = make_connector(Point(5, 0), Point(5, 20)).line_box()
        assert upright.width == MIN_EXTENT


class TestDiagramPlan:
    def test_of_type(self):
        bg = FillBackground(width=10, height=10, color="#fff")
        ph = DrawPlaceholder(bounds=Bounds(0, 0, 1, 1), text="x", text_color="#000", text_size=12)
        plan = DiagramPlan(width=10, height=10, operations=(bg, ph))
        assert plan.of_type(FillBackground) == [bg]
        assert plan.of_type(DrawPlaceholder) == [ph]

    def test_to_json_round_trips_through_json(self):
        ph = DrawPlaceholder(bounds=Bounds(1, 2, 3, 4), text="none", text_color="#000", text_size=12)
        data = json.loads(DiagramPlan(width=10, height=20, operations=(ph,)).to_json())
        assert data["width"] == 10
        assert data["operations"][0]["op"] == "DrawPlaceholder"
        assert data["operations"][0]["bounds"] == {"x": 1, "y": 2, "width": 3, "height": 4}

    def test_enums_serialize_as_values(self):
        op = DrawConnector(connector=make_connector(Point(0, 0), Point(1, 1)), color="#888", thickness=1.5)
        data = json.loads(DiagramPlan(width=1, height=1, operations=(op,)).to_json())
        assert data["operations"][0]["connector"]["style"] == "side_by_side"
        assert data["operations"][0]["connector"]["start_anchor"] == "middle"
