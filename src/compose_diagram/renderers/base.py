"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from compose_diagram.types import DiagramPlan


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, plan: DiagramPlan) -> str | bytes:
        """Render a diagram plan to a text document or a binary file."""
        ...
