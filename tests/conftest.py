"""Shared pytest fixtures and test helpers for compose_diagram tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from compose_diagram.config.models import LayoutConfig

SAMPLE_COMPOSE = """\
services:
  web:
    image: nginx:latest
    depends_on:
      - api
  api:
    image: node:18
    depends_on:
      db:
        condition: service_healthy
  db:
    image: postgres:15
  worker:
    build: .
    links:
      - "db:database"
      - cache
"""


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger and structlog state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("compose_diagram")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def compose_file(tmp_path: Path) -> Path:
    """A small four-service compose file on disk."""
    path = tmp_path / "docker-compose.yml"
    path.write_text(SAMPLE_COMPOSE, encoding="utf-8")
    return path


@pytest.fixture
def small_config() -> LayoutConfig:
    """Compact geometry: 10x10 boxes, 3 per row, 100 wide canvas."""
    return LayoutConfig(
        node_width=10,
        node_height=10,
        horizontal_spacing=5,
        vertical_spacing_within_row=20,
        vertical_spacing_between_tiers=10,
        canvas_width=100,
        top_margin=5,
        max_nodes_per_row=3,
    )
