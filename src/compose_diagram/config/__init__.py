"""Configuration: layout geometry, paint style and logging."""

from __future__ import annotations

from compose_diagram.config.logging import configure_logging
from compose_diagram.config.models import (
    DEFAULT_LAYOUT,
    DEFAULT_STYLE,
    LayoutConfig,
    StyleConfig,
    TierStyle,
)

__all__ = [
    "DEFAULT_LAYOUT",
    "DEFAULT_STYLE",
    "LayoutConfig",
    "StyleConfig",
    "TierStyle",
    "configure_logging",
]
