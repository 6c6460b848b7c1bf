"""Connector router — choose anchor sides and straight-segment geometry.

For each link u → v the anchors depend only on the vertical relation of the
two boxes:

  - v entirely below u  → u bottom-centre to v top-centre   (waterfall)
  - v entirely above u  → u top-centre to v bottom-centre   (waterfall)
  - vertical overlap    → both vertical mid-centres         (side by side)

"Entirely" is inclusive: touching edges count as below/above. Swapping u and
v lands in the mirrored branch, never in a different one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from compose_diagram.config.logging import get_logger
from compose_diagram.types import Anchor, Bounds, ConnectorPlan, ConnectorStyle, Point

log = get_logger(__name__)


def select_anchors(source: Bounds, target: Bounds) -> tuple[Anchor, Anchor, ConnectorStyle]:
    """Return ``(source_anchor, target_anchor, style)`` for a link between two boxes."""
    if target.top >= source.bottom:
        return Anchor.BOTTOM, Anchor.TOP, ConnectorStyle.WATERFALL
    if target.bottom <= source.top:
        return Anchor.TOP, Anchor.BOTTOM, ConnectorStyle.WATERFALL
    return Anchor.MIDDLE, Anchor.MIDDLE, ConnectorStyle.SIDE_BY_SIDE


def anchor_point(bounds: Bounds, anchor: Anchor) -> Point:
    """Horizontal centre of ``bounds`` at the anchored edge."""
    if anchor is Anchor.TOP:
        y = bounds.top
    elif anchor is Anchor.BOTTOM:
        y = bounds.bottom
    else:
        y = bounds.center_y
    return Point(bounds.center_x, y)


def route_connector(from_id: str, to_id: str, source: Bounds, target: Bounds) -> ConnectorPlan:
    """Route a single link between two positioned boxes."""
    start_anchor, end_anchor, style = select_anchors(source, target)
    return ConnectorPlan(
        from_id=from_id,
        to_id=to_id,
        start=anchor_point(source, start_anchor),
        end=anchor_point(target, end_anchor),
        style=style,
        start_anchor=start_anchor,
        end_anchor=end_anchor,
    )


def route_connectors(
    positions: Mapping[str, Bounds],
    links: Iterable[tuple[str, str]],
) -> tuple[ConnectorPlan, ...]:
    """Route every link whose endpoints both have positions, in link order.

    Links with an unknown endpoint are dropped. Self-links yield a
    zero-length segment; its derived length is clamped by ``ConnectorPlan``.
    """
    routes: list[ConnectorPlan] = []
    for from_id, to_id in links:
        source = positions.get(from_id)
        target = positions.get(to_id)
        if source is None or target is None:
            log.debug("connector.dropped", source=from_id, target=to_id)
            continue
        routes.append(route_connector(from_id, to_id, source, target))

    log.debug(
        "connectors.routed",
        count=len(routes),
        waterfall=sum(1 for r in routes if r.style is ConnectorStyle.WATERFALL),
    )
    return tuple(routes)
