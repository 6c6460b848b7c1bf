"""Public pipeline: nodes → diagram plan, and compose text → SVG or PowerPoint."""

from __future__ import annotations

from collections.abc import Iterable
from functools import partial

from compose_diagram.classify import CLASSIFICATION_RULES, KeywordRule, classify, group_by_tier
from compose_diagram.config.logging import get_logger
from compose_diagram.config.models import DEFAULT_LAYOUT, DEFAULT_STYLE, LayoutConfig, StyleConfig
from compose_diagram.graph import build_service_graph, service_links
from compose_diagram.layout import layout_grid
from compose_diagram.manifest import parse_compose
from compose_diagram.plan import assemble, placeholder_plan
from compose_diagram.renderers.pptx import ConnectorMode, PptxRenderer
from compose_diagram.renderers.svg import SvgRenderer
from compose_diagram.routing import route_connectors
from compose_diagram.types import DiagramPlan, Node

log = get_logger(__name__)


def build_plan(
    nodes: Iterable[Node],
    layout_config: LayoutConfig = DEFAULT_LAYOUT,
    style: StyleConfig = DEFAULT_STYLE,
    rules: tuple[KeywordRule, ...] = CLASSIFICATION_RULES,
) -> DiagramPlan:
    """Run the full pipeline: validate, classify, lay out, route, assemble.

    Raises ``DuplicateNodeError`` before any layout work if two nodes share
    an id. An empty node set yields the placeholder plan.
    """
    nodes = list(nodes)
    graph = build_service_graph(nodes)
    if not nodes:
        return placeholder_plan(layout_config.canvas_width, layout_config.top_margin, style)

    tiers = group_by_tier(nodes, partial(classify, rules=rules))
    grid = layout_grid(tiers, layout_config)
    connectors = route_connectors(grid.positions, service_links(graph))
    plan = assemble(tiers, grid, connectors, style)

    log.info(
        "diagram.planned",
        nodes=len(nodes),
        connectors=len(connectors),
        tiers=[len(t) for t in tiers],
    )
    return plan


def render_svg(
    manifest_text: str,
    layout_config: LayoutConfig = DEFAULT_LAYOUT,
    style: StyleConfig = DEFAULT_STYLE,
) -> str:
    """Parse a compose document and render its diagram as SVG."""
    nodes = parse_compose(manifest_text)
    return SvgRenderer().render(build_plan(nodes, layout_config, style))


def render_pptx(
    manifest_text: str,
    layout_config: LayoutConfig = DEFAULT_LAYOUT,
    style: StyleConfig = DEFAULT_STYLE,
    connector_mode: ConnectorMode | str = ConnectorMode.LINE,
) -> bytes:
    """Parse a compose document and render its diagram as a one-slide .pptx deck."""
    nodes = parse_compose(manifest_text)
    return PptxRenderer(connector_mode).render(build_plan(nodes, layout_config, style))
