"""PowerPoint renderer — renders a DiagramPlan to a one-slide .pptx deck.

Plan units map to points. The slide is at least 1920×1080 and grows to fit
the plan; plans larger than PowerPoint's maximum slide size are scaled down
uniformly. Connectors are drawn as native straight connectors with an
arrowhead (``ConnectorMode.LINE``) or as thin rotated bars
(``ConnectorMode.ROTATED``).
"""

from __future__ import annotations

import io
from enum import Enum
from typing import Any

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE
from pptx.enum.text import MSO_VERTICAL_ANCHOR, PP_ALIGN
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Length, Pt

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

MIN_PAGE_SIZE = (1920.0, 1080.0)
MAX_SLIDE_POINTS = 56 * 72  # PowerPoint caps either slide side at 56 inches
BLANK_LAYOUT = 6

SHAPES = {
    ShapeFamily.RECTANGLE: MSO_SHAPE.RECTANGLE,
    ShapeFamily.ROUNDED: MSO_SHAPE.ROUNDED_RECTANGLE,
    ShapeFamily.STORAGE: MSO_SHAPE.FLOWCHART_MAGNETIC_DISK,
}


class ConnectorMode(str, Enum):
    """How connectors are drawn on the slide."""

    LINE = "line"
    ROTATED = "rotated"


def _rgb(color: str) -> RGBColor:
    return RGBColor.from_string(color.lstrip("#").upper())


def _pt(value: float, scale: float) -> Length:
    return Pt(value * scale)


def _write(paragraph: Any, text: str, size: float, color: str, bold: bool = False) -> None:
    paragraph.alignment = PP_ALIGN.CENTER
    run = paragraph.add_run()
    run.text = text
    run.font.size = Pt(size)
    run.font.bold = bold
    run.font.color.rgb = _rgb(color)


# ─── Shape Rendering ────────────────────────────────────────────────────────


def _box(slide: Any, shape: ShapeFamily, bounds: Bounds, scale: float) -> Any:
    box = slide.shapes.add_shape(
        SHAPES[shape],
        _pt(bounds.x, scale),
        _pt(bounds.y, scale),
        _pt(bounds.width, scale),
        _pt(bounds.height, scale),
    )
    box.shadow.inherit = False
    return box


def _render_shadow(slide: Any, op: DrawShadow, scale: float) -> None:
    shadow = _box(slide, op.shape, op.bounds, scale)
    shadow.fill.solid()
    shadow.fill.fore_color.rgb = _rgb(op.color)
    shadow.line.fill.background()


def _render_node(slide: Any, op: DrawNode, scale: float) -> None:
    node = _box(slide, op.shape, op.bounds, scale)
    node.fill.solid()
    node.fill.fore_color.rgb = _rgb(op.fill_color)
    node.line.color.rgb = _rgb(op.line_color)
    node.line.width = _pt(op.line_width, scale)

    tf = node.text_frame
    tf.word_wrap = True
    tf.vertical_anchor = MSO_VERTICAL_ANCHOR.MIDDLE
    _write(tf.paragraphs[0], op.label, op.label_size * scale, op.text_color, bold=True)
    if op.sublabel is not None:
        _write(tf.add_paragraph(), op.sublabel, op.sublabel_size * scale, op.text_color)


def _render_placeholder(slide: Any, op: DrawPlaceholder, scale: float) -> None:
    b = op.bounds
    box = slide.shapes.add_textbox(_pt(b.x, scale), _pt(b.y, scale), _pt(b.width, scale), _pt(b.height, scale))
    _write(box.text_frame.paragraphs[0], op.text, op.text_size * scale, op.text_color)


# ─── Connector Rendering ────────────────────────────────────────────────────


def _add_arrowhead(connector: Any) -> None:
    tail = OxmlElement("a:tailEnd")
    tail.set("type", "triangle")
    connector._element.spPr.get_or_add_ln().append(tail)


def _render_line(slide: Any, op: DrawConnector, scale: float) -> None:
    # The line box is never degenerate; its flips give the drawing direction.
    box = op.connector.line_box()
    left, right = box.x, box.x + box.width
    top, bottom = box.y, box.y + box.height
    begin_x, end_x = (right, left) if box.flip_h else (left, right)
    begin_y, end_y = (bottom, top) if box.flip_v else (top, bottom)

    line = slide.shapes.add_connector(
        MSO_CONNECTOR.STRAIGHT,
        _pt(begin_x, scale),
        _pt(begin_y, scale),
        _pt(end_x, scale),
        _pt(end_y, scale),
    )
    line.line.color.rgb = _rgb(op.color)
    line.line.width = _pt(op.thickness, scale)
    _add_arrowhead(line)


def _render_bar(slide: Any, op: DrawConnector, scale: float) -> None:
    rect = op.connector.as_rotated_rect(op.thickness)
    bar = slide.shapes.add_shape(
        MSO_SHAPE.RECTANGLE,
        _pt(rect.center.x - rect.length / 2, scale),
        _pt(rect.center.y - rect.thickness / 2, scale),
        _pt(rect.length, scale),
        _pt(rect.thickness, scale),
    )
    bar.rotation = rect.angle % 360.0
    bar.shadow.inherit = False
    bar.fill.solid()
    bar.fill.fore_color.rgb = _rgb(op.color)
    bar.line.fill.background()


# ─── Public Renderer ────────────────────────────────────────────────────────


class PptxRenderer:
    """PowerPoint renderer — consumes a DiagramPlan, produces .pptx bytes.

    Operations become slide shapes in plan order, so the plan's z-order holds.
    ``FillBackground`` paints the slide background.
    """

    def __init__(self, connector_mode: ConnectorMode | str = ConnectorMode.LINE) -> None:
        self.connector_mode = ConnectorMode(connector_mode)

    def render(self, plan: DiagramPlan) -> bytes:
        page_w = max(plan.width, MIN_PAGE_SIZE[0])
        page_h = max(plan.height, MIN_PAGE_SIZE[1])
        scale = min(1.0, MAX_SLIDE_POINTS / max(page_w, page_h))

        prs = Presentation()
        prs.slide_width = _pt(page_w, scale)
        prs.slide_height = _pt(page_h, scale)
        slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])

        for op in plan.operations:
            self._render_op(slide, op, scale)

        out = io.BytesIO()
        prs.save(out)
        return out.getvalue()

    def _render_op(self, slide: Any, op: PaintOp, scale: float) -> None:
        if isinstance(op, FillBackground):
            slide.background.fill.solid()
            slide.background.fill.fore_color.rgb = _rgb(op.color)
        elif isinstance(op, DrawConnector):
            if self.connector_mode is ConnectorMode.ROTATED:
                _render_bar(slide, op, scale)
            else:
                _render_line(slide, op, scale)
        elif isinstance(op, DrawShadow):
            _render_shadow(slide, op, scale)
        elif isinstance(op, DrawNode):
            _render_node(slide, op, scale)
        elif isinstance(op, DrawPlaceholder):
            _render_placeholder(slide, op, scale)
        else:
            raise TypeError(f"Unknown paint operation: {type(op).__name__}")
