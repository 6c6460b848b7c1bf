"""Value types shared by the classifier, layout engine, router and renderers.

Everything here is immutable. A layout request builds fresh instances and
hands them downstream read-only.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from enum import Enum, IntEnum
from typing import Any, TypeVar, Union

# Smallest extent a derived connector primitive may have (length, thickness,
# bounding-box side). Keeps renderer primitives from collapsing to nothing.
MIN_EXTENT: float = 1.0


# ─── Input Model ──────────────────────────────────────────────────────────────


class Tier(IntEnum):
    """Semantic layer of a service. The ordinal is the top-to-bottom order."""

    FRONTEND = 0
    MIDDLE = 1
    DATA = 2


TIER_COUNT: int = len(Tier)


@dataclass(frozen=True)
class Node:
    """A service taken from the manifest.

    ``links`` is an unordered set of target ids. Targets that are not part of
    the request are ignored downstream.
    """

    id: str
    image: str = ""
    tier_hint: str | None = None
    links: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable of ids for convenience; store a frozenset.
        if not isinstance(self.links, frozenset):
            object.__setattr__(self, "links", frozenset(self.links))


# ─── Geometry ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Point:
    """A 2D point in abstract diagram units."""

    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box: top-left corner plus size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def offset(self, dx: float, dy: float) -> Bounds:
        return Bounds(self.x + dx, self.y + dy, self.width, self.height)

    def intersects(self, other: Bounds) -> bool:
        """True when the interiors overlap. Shared edges do not count."""
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )


# ─── Connectors ───────────────────────────────────────────────────────────────


class Anchor(str, Enum):
    """Where on a box a connector attaches (always at the horizontal centre)."""

    TOP = "top"
    BOTTOM = "bottom"
    MIDDLE = "middle"


class ConnectorStyle(str, Enum):
    """Routing kind of a connector."""

    WATERFALL = "waterfall"
    SIDE_BY_SIDE = "side_by_side"


@dataclass(frozen=True)
class RotatedRect:
    """A thin rectangle centred on a connector and rotated by ``angle`` degrees."""

    center: Point
    length: float
    thickness: float
    angle: float


@dataclass(frozen=True)
class LineBox:
    """Bounding box of a connector for line primitives anchored by a box.

    ``flip_h`` / ``flip_v`` tell the renderer the line runs right-to-left or
    bottom-to-top inside the box.
    """

    x: float
    y: float
    width: float
    height: float
    flip_h: bool
    flip_v: bool


@dataclass(frozen=True)
class ConnectorPlan:
    """A routed straight connector between two positioned nodes.

    Only the endpoints are stored. Length and angle are derived from them so
    there is a single source of truth.
    """

    from_id: str
    to_id: str
    start: Point
    end: Point
    style: ConnectorStyle
    start_anchor: Anchor
    end_anchor: Anchor

    @property
    def dx(self) -> float:
        return self.end.x - self.start.x

    @property
    def dy(self) -> float:
        return self.end.y - self.start.y

    @property
    def length(self) -> float:
        """Euclidean length, clamped to ``MIN_EXTENT``."""
        return max(math.hypot(self.dx, self.dy), MIN_EXTENT)

    @property
    def angle(self) -> float:
        """Direction from start to end in degrees (``atan2(dy, dx)``)."""
        return math.degrees(math.atan2(self.dy, self.dx))

    def as_rotated_rect(self, thickness: float) -> RotatedRect:
        center = Point((self.start.x + self.end.x) / 2, (self.start.y + self.end.y) / 2)
        return RotatedRect(
            center=center,
            length=self.length,
            thickness=max(thickness, MIN_EXTENT),
            angle=self.angle,
        )

    def line_box(self) -> LineBox:
        return LineBox(
            x=min(self.start.x, self.end.x),
            y=min(self.start.y, self.end.y),
            width=max(abs(self.dx), MIN_EXTENT),
            height=max(abs(self.dy), MIN_EXTENT),
            flip_h=self.dx < 0,
            flip_v=self.dy < 0,
        )


# ─── Paint Plan ───────────────────────────────────────────────────────────────


class ShapeFamily(str, Enum):
    """Outline family a renderer draws for a node (and its shadow)."""

    RECTANGLE = "rectangle"
    ROUNDED = "rounded"
    STORAGE = "storage"


@dataclass(frozen=True)
class FillBackground:
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class DrawConnector:
    connector: ConnectorPlan
    color: str
    thickness: float


@dataclass(frozen=True)
class DrawShadow:
    node_id: str
    bounds: Bounds
    shape: ShapeFamily
    color: str


@dataclass(frozen=True)
class DrawNode:
    """A labeled node box. ``sublabel`` is the image line, if any."""

    node_id: str
    tier: Tier
    bounds: Bounds
    shape: ShapeFamily
    fill_color: str
    line_color: str
    line_width: float
    text_color: str
    label: str
    label_size: float
    sublabel: str | None
    sublabel_size: float


@dataclass(frozen=True)
class DrawPlaceholder:
    bounds: Bounds
    text: str
    text_color: str
    text_size: float


PaintOp = Union[FillBackground, DrawConnector, DrawShadow, DrawNode, DrawPlaceholder]

_Op = TypeVar("_Op", FillBackground, DrawConnector, DrawShadow, DrawNode, DrawPlaceholder)


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Unserializable value: {value!r}")


@dataclass(frozen=True)
class DiagramPlan:
    """Ordered, renderer-agnostic paint operations, back to front."""

    width: float
    height: float
    operations: tuple[PaintOp, ...]

    def of_type(self, op_type: type[_Op]) -> list[_Op]:
        return [op for op in self.operations if isinstance(op, op_type)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "operations": [{"op": type(op).__name__, **asdict(op)} for op in self.operations],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True, default=_json_default)
