"""Exceptions raised by compose_diagram."""

from __future__ import annotations


class DiagramError(Exception):
    """Base class for every error the diagram pipeline raises on purpose."""


class DuplicateNodeError(DiagramError, ValueError):
    """Two nodes in one request share an id. The whole request is rejected."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Duplicate node id: {node_id!r}")
        self.node_id = node_id


class ManifestError(DiagramError):
    """The manifest text could not be read as YAML."""
