"""Grid layout engine — place tiered nodes on a centred, row-wrapping grid.

Tiers are stacked top to bottom in ordinal order (frontend, middle, data).
Inside a tier nodes keep their given order and fill rows of at most
``max_nodes_per_row`` boxes. Each row is centred on its own, so a short last
row sits in the middle of the canvas rather than flush left.

Vertical cursor, starting at ``top_margin``:

    row y = cursor
    cursor += vertical_spacing_within_row          (after every row)
    cursor += vertical_spacing_between_tiers       (after a tier's last row)

Empty tiers take no space. The final cursor is the canvas height.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from compose_diagram.config.logging import get_logger
from compose_diagram.config.models import LayoutConfig
from compose_diagram.graph import check_unique_ids
from compose_diagram.types import Bounds, Node, Tier

log = get_logger(__name__)

# ─── Row Partitioning ─────────────────────────────────────────────────────────


def row_count(node_count: int, max_per_row: int) -> int:
    """Number of rows needed for ``node_count`` nodes: ``ceil(n / m)``."""
    return math.ceil(node_count / max_per_row) if node_count > 0 else 0


def partition_rows(nodes: Sequence[Node], max_per_row: int) -> list[list[Node]]:
    """Split ``nodes`` into consecutive rows of at most ``max_per_row`` nodes."""
    if max_per_row < 1:
        raise ValueError(f"max_per_row must be >= 1, got {max_per_row}")
    return [
        list(nodes[row * max_per_row : (row + 1) * max_per_row]) for row in range(row_count(len(nodes), max_per_row))
    ]


# ─── Grid Placement ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GridLayout:
    """Positions computed by ``layout_grid``.

    Attributes:
        positions: Read-only node id → bounds mapping.
        rows: Per tier (indexed by ordinal), the node ids of each row.
        canvas_width: Width the rows were centred in.
        canvas_height: Final vertical cursor; the renderer sizes to this.
    """

    positions: Mapping[str, Bounds]
    rows: tuple[tuple[tuple[str, ...], ...], ...]
    canvas_width: float
    canvas_height: float


def layout_grid(tiers: Sequence[Sequence[Node]], config: LayoutConfig) -> GridLayout:
    """Assign bounds to every node in ``tiers`` (indexed by tier ordinal).

    Raises ``DuplicateNodeError`` if an id appears more than once across tiers.
    """
    check_unique_ids(node for members in tiers for node in members)

    positions: dict[str, Bounds] = {}
    tier_rows: list[tuple[tuple[str, ...], ...]] = []
    cursor = config.top_margin

    for tier in Tier:
        members = tiers[tier] if tier < len(tiers) else ()
        if not members:
            tier_rows.append(())
            continue

        rows = partition_rows(members, config.max_nodes_per_row)
        for row in rows:
            row_width = config.row_width(len(row))
            x = (config.canvas_width - row_width) / 2
            for node in row:
                positions[node.id] = Bounds(x, cursor, config.node_width, config.node_height)
                x += config.node_width + config.horizontal_spacing
            cursor += config.vertical_spacing_within_row
        cursor += config.vertical_spacing_between_tiers

        tier_rows.append(tuple(tuple(node.id for node in row) for row in rows))
        log.debug(
            "layout.tier_placed",
            tier=tier.name,
            nodes=len(members),
            rows=[len(row) for row in rows],
        )

    log.debug("layout.computed", nodes=len(positions), canvas_height=cursor)
    return GridLayout(
        positions=MappingProxyType(positions),
        rows=tuple(tier_rows),
        canvas_width=config.canvas_width,
        canvas_height=cursor,
    )
