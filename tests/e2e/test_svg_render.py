"""End-to-end: compose text → plan → SVG."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from compose_diagram.api import build_plan, render_svg
from compose_diagram.renderers import Renderer, SvgRenderer
from compose_diagram.types import Node

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def sample_svg(compose_file) -> str:
    return render_svg(compose_file.read_text(encoding="utf-8"))


def test_svg_is_well_formed(sample_svg: str):
    root = ET.fromstring(sample_svg)
    assert root.tag == f"{SVG_NS}svg"
    assert root.get("width") == "1920"


def test_one_line_per_resolved_link(sample_svg: str):
    """web→api, api→db, worker→db; worker→cache has no target."""
    root = ET.fromstring(sample_svg)
    lines = root.findall(f"{SVG_NS}line")
    assert {(el.get("data-from"), el.get("data-to")) for el in lines} == {
        ("web", "api"),
        ("api", "db"),
        ("worker", "db"),
    }
    assert all(el.get("marker-end") == "url(#arrowhead)" for el in lines)


def test_storage_shape_for_database(sample_svg: str):
    """db is drawn as a cylinder: its shadow and body each carry a cap ellipse."""
    root = ET.fromstring(sample_svg)
    assert len(root.findall(f"{SVG_NS}ellipse")) == 2


def test_labels_present(sample_svg: str):
    root = ET.fromstring(sample_svg)
    texts = [el.text for el in root.findall(f"{SVG_NS}text")]
    for label in ("web", "api", "db", "worker", "nginx:latest", "unknown"):
        assert label in texts


def test_connectors_painted_before_nodes(sample_svg: str):
    assert sample_svg.rindex("<line") < sample_svg.index("<text")


def test_text_escaped():
    svg = SvgRenderer().render(build_plan([Node(id="a&b", image="<img>")]))
    assert "a&amp;b" in svg
    assert "&lt;img&gt;" in svg
    ET.fromstring(svg)


def test_empty_manifest_placeholder():
    svg = render_svg("")
    root = ET.fromstring(svg)
    (text,) = root.findall(f"{SVG_NS}text")
    assert text.text == "No services to display"
    assert root.findall(f"{SVG_NS}line") == []


def test_svg_renderer_satisfies_protocol():
    renderer: Renderer = SvgRenderer()
    assert renderer.render(build_plan([])).startswith("<svg")
