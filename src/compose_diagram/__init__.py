"""compose_diagram — tiered architecture diagrams from compose service graphs.

Pipeline:
  1. Classification   (keyword heuristics → frontend / middle / data tier)
  2. Grid layout      (row-wrapping, per-row centring, tier stacking)
  3. Routing          (waterfall vs side-by-side anchors, straight segments)
  4. Plan assembly    (background, connectors, shadows, nodes)

The result is a ``DiagramPlan`` that any renderer can paint.
"""

from __future__ import annotations

import logging

__version__ = "0.3.0"

from compose_diagram.api import build_plan, render_pptx, render_svg
from compose_diagram.classify import CLASSIFICATION_RULES, KeywordRule, classify, group_by_tier
from compose_diagram.config.models import DEFAULT_LAYOUT, DEFAULT_STYLE, LayoutConfig, StyleConfig, TierStyle
from compose_diagram.errors import DiagramError, DuplicateNodeError, ManifestError
from compose_diagram.layout import GridLayout, layout_grid, partition_rows
from compose_diagram.manifest import parse_compose
from compose_diagram.plan import assemble, placeholder_plan
from compose_diagram.routing import route_connectors, select_anchors
from compose_diagram.types import (
    Anchor,
    Bounds,
    ConnectorPlan,
    ConnectorStyle,
    DiagramPlan,
    Node,
    Point,
    ShapeFamily,
    Tier,
)

# Silent unless the host application (or the CLI) configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CLASSIFICATION_RULES",
    "DEFAULT_LAYOUT",
    "DEFAULT_STYLE",
    "Anchor",
    "Bounds",
    "ConnectorPlan",
    "ConnectorStyle",
    "DiagramError",
    "DiagramPlan",
    "DuplicateNodeError",
    "GridLayout",
    "KeywordRule",
    "LayoutConfig",
    "ManifestError",
    "Node",
    "Point",
    "ShapeFamily",
    "StyleConfig",
    "Tier",
    "TierStyle",
    "assemble",
    "build_plan",
    "classify",
    "group_by_tier",
    "layout_grid",
    "parse_compose",
    "partition_rows",
    "placeholder_plan",
    "render_pptx",
    "render_svg",
    "route_connectors",
    "select_anchors",
]
