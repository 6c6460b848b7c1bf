"""SVG renderer — renders a DiagramPlan to an SVG string."""

from __future__ import annotations

from compose_diagram.types import (
    Bounds,
    DiagramPlan,
    DrawConnector,
    DrawNode,
    DrawPlaceholder,
    DrawShadow,
    FillBackground,
    PaintOp,
    ShapeFamily,
)

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_FAMILY = "Arial, Helvetica, sans-serif"
LINE_GAP = 4  # pixels between label and sublabel
STORAGE_CAP_RATIO = 0.15  # ellipse cap height / box height for storage shapes
ROUNDED_RADIUS_RATIO = 0.15  # corner radius / min(width, height)


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _num(v: float) -> str:
    """Format a coordinate without a trailing ``.0``."""
    text = str(int(v)) if float(v).is_integer() else f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _font(size: float) -> str:
    return f'font-family="{FONT_FAMILY}" font-size="{_num(size)}"'


# ─── Shape Rendering ────────────────────────────────────────────────────────


def _shape(bounds: Bounds, shape: ShapeFamily, paint: str) -> str:
    x, y, w, h = _num(bounds.x), _num(bounds.y), _num(bounds.width), _num(bounds.height)
    if shape == ShapeFamily.ROUNDED:
        r = _num(min(bounds.width, bounds.height) * ROUNDED_RADIUS_RATIO)
        return f'<rect x="{x}" y="{y}" width="{w}" height="{h}" rx="{r}" ry="{r}" {paint}/>'
    if shape == ShapeFamily.STORAGE:
        return _storage(bounds, paint)
    return f'<rect x="{x}" y="{y}" width="{w}" height="{h}" {paint}/>'


def _storage(bounds: Bounds, paint: str) -> str:
    """Cylinder: body path with elliptical bottom, plus a top cap ellipse."""
    ry = bounds.height * STORAGE_CAP_RATIO / 2
    rx = bounds.width / 2
    left, right = bounds.left, bounds.right
    top, bottom = bounds.top + ry, bounds.bottom - ry
    d = (
        f"M {_num(left)} {_num(top)} "
        f"L {_num(left)} {_num(bottom)} "
        f"A {_num(rx)} {_num(ry)} 0 0 0 {_num(right)} {_num(bottom)} "
        f"L {_num(right)} {_num(top)} "
        f"A {_num(rx)} {_num(ry)} 0 0 0 {_num(left)} {_num(top)} Z"
    )
    cap = (
        f'<ellipse cx="{_num(bounds.center_x)}" cy="{_num(top)}" '
        f'rx="{_num(rx)}" ry="{_num(ry)}" {paint}/>'
    )
    return f'<path d="{d}" {paint}/>\n{cap}'


def _render_node(op: DrawNode) -> str:
    b = op.bounds
    paint = f'fill="{op.fill_color}" stroke="{op.line_color}" stroke-width="{_num(op.line_width)}"'
    parts = [_shape(b, op.shape, paint)]

    cx = _num(b.center_x)
    if op.sublabel is None:
        parts.append(
            f'<text x="{cx}" y="{_num(b.center_y)}" dominant-baseline="central" text-anchor="middle" '
            f'font-weight="bold" fill="{op.text_color}" {_font(op.label_size)}>{_escape(op.label)}</text>'
        )
    else:
        total_h = op.label_size + LINE_GAP + op.sublabel_size
        label_y = b.center_y - total_h / 2 + op.label_size / 2
        sub_y = label_y + op.label_size / 2 + LINE_GAP + op.sublabel_size / 2
        parts.append(
            f'<text x="{cx}" y="{_num(label_y)}" dominant-baseline="central" text-anchor="middle" '
            f'font-weight="bold" fill="{op.text_color}" {_font(op.label_size)}>{_escape(op.label)}</text>'
        )
        parts.append(
            f'<text x="{cx}" y="{_num(sub_y)}" dominant-baseline="central" text-anchor="middle" '
            f'fill="{op.text_color}" {_font(op.sublabel_size)}>{_escape(op.sublabel)}</text>'
        )
    return "\n".join(parts)


def _render_shadow(op: DrawShadow) -> str:
    return _shape(op.bounds, op.shape, f'fill="{op.color}" stroke="none"')


# ─── Connector Rendering ────────────────────────────────────────────────────


def _render_connector(op: DrawConnector) -> str:
    c = op.connector
    return (
        f'<line x1="{_num(c.start.x)}" y1="{_num(c.start.y)}" x2="{_num(c.end.x)}" y2="{_num(c.end.y)}" '
        f'stroke="{op.color}" stroke-width="{_num(op.thickness)}" '
        f'data-from="{_escape(c.from_id)}" data-to="{_escape(c.to_id)}" data-style="{c.style.value}" '
        f'marker-end="url(#arrowhead)"/>'
    )


def _render_placeholder(op: DrawPlaceholder) -> str:
    b = op.bounds
    return (
        f'<text x="{_num(b.center_x)}" y="{_num(b.center_y)}" dominant-baseline="central" '
        f'text-anchor="middle" fill="{op.text_color}" {_font(op.text_size)}>{_escape(op.text)}</text>'
    )


def _render_op(op: PaintOp) -> str:
    if isinstance(op, FillBackground):
        return f'<rect width="{_num(op.width)}" height="{_num(op.height)}" fill="{op.color}"/>'
    if isinstance(op, DrawConnector):
        return _render_connector(op)
    if isinstance(op, DrawShadow):
        return _render_shadow(op)
    if isinstance(op, DrawNode):
        return _render_node(op)
    if isinstance(op, DrawPlaceholder):
        return _render_placeholder(op)
    raise TypeError(f"Unknown paint operation: {type(op).__name__}")


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a DiagramPlan, produces an SVG string.

    Operations are emitted in plan order, so the plan's z-order holds.
    """

    def render(self, plan: DiagramPlan) -> str:
        svg_w, svg_h = _num(plan.width), _num(plan.height)
        connector_color = next((op.color for op in plan.of_type(DrawConnector)), "black")

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{svg_w}" height="{svg_h}" viewBox="0 0 {svg_w} {svg_h}">',
            "<defs>",
            '  <marker id="arrowhead" markerWidth="10" markerHeight="7" refX="10" refY="3.5" orient="auto">',
            f'    <polygon points="0 0, 10 3.5, 0 7" fill="{connector_color}"/>',
            "  </marker>",
            "</defs>",
        ]
        parts.extend(_render_op(op) for op in plan.operations)
        parts.append("</svg>")
        return "\n".join(parts)
