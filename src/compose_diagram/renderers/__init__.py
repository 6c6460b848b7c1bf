"""Renderers that turn a ``DiagramPlan`` into a concrete document."""

from __future__ import annotations

from compose_diagram.renderers.base import Renderer
from compose_diagram.renderers.pptx import ConnectorMode, PptxRenderer
from compose_diagram.renderers.svg import SvgRenderer

__all__ = ["ConnectorMode", "PptxRenderer", "Renderer", "SvgRenderer"]
