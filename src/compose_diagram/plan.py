"""Diagram plan assembler — turn layout + connectors into ordered paint operations.

Z-order, back to front:
  1. background fill
  2. connectors
  3. node shadows (same shape family, offset, flat color)
  4. nodes with labels
"""

from __future__ import annotations

from collections.abc import Sequence

from compose_diagram.config.logging import get_logger
from compose_diagram.config.models import DEFAULT_STYLE, StyleConfig
from compose_diagram.graph import check_unique_ids
from compose_diagram.layout import GridLayout
from compose_diagram.types import (
    Bounds,
    ConnectorPlan,
    DiagramPlan,
    DrawConnector,
    DrawNode,
    DrawPlaceholder,
    DrawShadow,
    FillBackground,
    Node,
    PaintOp,
    Tier,
)

log = get_logger(__name__)


def placeholder_plan(canvas_width: float, top_margin: float, style: StyleConfig = DEFAULT_STYLE) -> DiagramPlan:
    """Plan for a request without nodes: a single placeholder text box."""
    bounds = Bounds(top_margin, top_margin, style.placeholder_width, style.placeholder_height)
    op = DrawPlaceholder(
        bounds=bounds,
        text=style.placeholder_text,
        text_color=style.placeholder_color,
        text_size=style.label_size,
    )
    width = max(canvas_width, bounds.right + top_margin)
    return DiagramPlan(width=width, height=bounds.bottom + top_margin, operations=(op,))


def _node_op(node: Node, tier: Tier, bounds: Bounds, style: StyleConfig) -> DrawNode:
    tier_style = style.for_tier(tier)
    return DrawNode(
        node_id=node.id,
        tier=tier,
        bounds=bounds,
        shape=tier_style.shape,
        fill_color=tier_style.fill_color,
        line_color=tier_style.line_color,
        line_width=style.node_line_width,
        text_color=tier_style.text_color,
        label=node.id,
        label_size=style.label_size,
        sublabel=node.image or None,
        sublabel_size=style.sublabel_size,
    )


def assemble(
    tiers: Sequence[Sequence[Node]],
    layout: GridLayout,
    connectors: Sequence[ConnectorPlan],
    style: StyleConfig = DEFAULT_STYLE,
) -> DiagramPlan:
    """Build the paint plan. ``tiers`` is indexed by tier ordinal.

    Nodes without a position in ``layout`` are skipped. Raises
    ``DuplicateNodeError`` if an id appears more than once across tiers.
    """
    check_unique_ids(node for members in tiers for node in members)

    placed: list[tuple[Node, Tier, Bounds]] = []
    for tier in Tier:
        members = tiers[tier] if tier < len(tiers) else ()
        for node in members:
            bounds = layout.positions.get(node.id)
            if bounds is not None:
                placed.append((node, tier, bounds))

    if not placed:
        return placeholder_plan(layout.canvas_width, _top_margin(layout), style)

    dx, dy = style.shadow_offset
    operations: list[PaintOp] = [
        FillBackground(width=layout.canvas_width, height=layout.canvas_height, color=style.background_color)
    ]
    operations.extend(
        DrawConnector(connector=c, color=style.connector_color, thickness=style.connector_thickness)
        for c in connectors
    )
    operations.extend(
        DrawShadow(
            node_id=node.id,
            bounds=bounds.offset(dx, dy),
            shape=style.for_tier(tier).shape,
            color=style.shadow_color,
        )
        for node, tier, bounds in placed
    )
    operations.extend(_node_op(node, tier, bounds, style) for node, tier, bounds in placed)

    log.debug("plan.assembled", nodes=len(placed), connectors=len(connectors), operations=len(operations))
    return DiagramPlan(width=layout.canvas_width, height=layout.canvas_height, operations=tuple(operations))


def _top_margin(layout: GridLayout) -> float:
    # An empty grid's final cursor is its top margin.
    return layout.canvas_height if not layout.positions else min(b.top for b in layout.positions.values())
