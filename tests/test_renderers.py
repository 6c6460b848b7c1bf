"""Tests for renderers — SVG number formatting and the PowerPoint slide."""

from __future__ import annotations

import io

import pytest
from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE
from pptx.shapes.connector import Connector
from pptx.util import Pt

from compose_diagram.api import build_plan, render_pptx
from compose_diagram.renderers import ConnectorMode, PptxRenderer, Renderer
from compose_diagram.renderers.pptx import MAX_SLIDE_POINTS
from compose_diagram.renderers.svg import _num
from compose_diagram.types import MIN_EXTENT, Node

# ─── Helpers ──────────────────────────────────────────────────────────────────


def three_tier_nodes() -> list[Node]:
    return [
        Node(id="web", image="nginx:latest", links=frozenset({"api"})),
        Node(id="api", image="node:18", links=frozenset({"db"})),
        Node(id="db", image="postgres:15"),
    ]


def load_slide(data: bytes):
    prs = Presentation(io.BytesIO(data))
    assert len(prs.slides) == 1
    return prs, prs.slides[0]


def connectors(slide) -> list[Connector]:
    return [shape for shape in slide.shapes if isinstance(shape, Connector)]


# ─── SVG Numbers ──────────────────────────────────────────────────────────────


class TestSvgNumbers:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (100, "100"),
            (100.0, "100"),
            (7.5, "7.5"),
            (7.25, "7.25"),
            (2.999, "3"),
            (0.001, "0"),
            (-0.001, "0"),
            (-0.0, "0"),
            (-12.5, "-12.5"),
        ],
    )
    def test_num(self, value: float, expected: str):
        """Numbers never end in a bare point and never read as negative zero."""
        assert _num(value) == expected


# ─── PowerPoint ───────────────────────────────────────────────────────────────


class TestPptxRenderer:
    def test_satisfies_protocol(self):
        renderer: Renderer = PptxRenderer()
        assert isinstance(renderer.render(build_plan([])), bytes)

    def test_slide_is_at_least_full_hd(self):
        """A small plan still gets a 1920x1080 slide."""
        prs, _ = load_slide(PptxRenderer().render(build_plan([Node(id="api")])))
        assert prs.slide_width == Pt(1920)
        assert prs.slide_height == Pt(1080)

    def test_shapes_follow_plan_order(self):
        """Connectors first, then shadows, then nodes; background is not a shape."""
        _, slide = load_slide(PptxRenderer().render(build_plan(three_tier_nodes())))
        shapes = list(slide.shapes)
        assert len(shapes) == 2 + 3 + 3
        assert all(isinstance(s, Connector) for s in shapes[:2])
        assert not any(isinstance(s, Connector) for s in shapes[2:])

    def test_node_shapes_and_labels(self):
        _, slide = load_slide(PptxRenderer().render(build_plan(three_tier_nodes())))
        web, api, db = list(slide.shapes)[-3:]
        assert web.auto_shape_type == MSO_SHAPE.ROUNDED_RECTANGLE
        assert db.auto_shape_type == MSO_SHAPE.FLOWCHART_MAGNETIC_DISK
        assert web.text_frame.text == "web\nnginx:latest"
        assert db.text_frame.paragraphs[0].runs[0].font.bold is True

    def test_node_without_image_has_one_line(self):
        _, slide = load_slide(PptxRenderer().render(build_plan([Node(id="worker")])))
        node = list(slide.shapes)[-1]
        assert node.text_frame.text == "worker"

    def test_line_connector_endpoints(self):
        """web → api runs from web's bottom-centre to api's top-centre."""
        plan = build_plan(three_tier_nodes())
        _, slide = load_slide(PptxRenderer().render(plan))
        first = connectors(slide)[0]
        assert (first.begin_x, first.begin_y) == (Pt(960), Pt(200))
        assert first.end_y == Pt(300)
        # Vertical lines keep a minimum-width box.
        assert first.end_x - first.begin_x == Pt(MIN_EXTENT)

    def test_upward_connector_keeps_direction(self):
        """A link to a higher tier is drawn bottom to top through a flipped box."""
        nodes = [Node(id="db", image="postgres", links=frozenset({"web"})), Node(id="web", image="nginx")]
        _, slide = load_slide(PptxRenderer().render(build_plan(nodes)))
        (line,) = connectors(slide)
        assert line.begin_y > line.end_y

    def test_line_connector_has_arrowhead(self):
        _, slide = load_slide(PptxRenderer().render(build_plan(three_tier_nodes())))
        xml = connectors(slide)[0]._element.xml
        assert "tailEnd" in xml
        assert 'type="triangle"' in xml

    def test_self_link_is_not_degenerate(self):
        _, slide = load_slide(PptxRenderer().render(build_plan([Node(id="api", links=frozenset({"api"}))])))
        (line,) = connectors(slide)
        assert line.width > 0
        assert line.height > 0

    def test_rotated_connectors(self):
        """Rotated bars replace line connectors, turned to the segment angle."""
        data = PptxRenderer(ConnectorMode.ROTATED).render(build_plan(three_tier_nodes()))
        _, slide = load_slide(data)
        assert connectors(slide) == []
        bar = list(slide.shapes)[0]
        assert bar.auto_shape_type == MSO_SHAPE.RECTANGLE
        assert bar.rotation == pytest.approx(90)
        assert bar.width == Pt(100)

    def test_placeholder(self):
        _, slide = load_slide(PptxRenderer().render(build_plan([])))
        (box,) = list(slide.shapes)
        assert box.text_frame.text == "No services to display"

    def test_tall_plan_scaled_to_max_slide(self):
        """Slides never exceed PowerPoint's maximum side length."""
        nodes = [Node(id=f"svc-{i:03d}") for i in range(200)]
        prs, _ = load_slide(PptxRenderer().render(build_plan(nodes)))
        assert prs.slide_height <= Pt(MAX_SLIDE_POINTS)
        assert prs.slide_width < Pt(1920)

    def test_render_pptx_from_manifest(self, compose_file):
        data = render_pptx(compose_file.read_text(encoding="utf-8"))
        _, slide = load_slide(data)
        assert len(connectors(slide)) == 3
