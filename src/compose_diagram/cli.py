"""Command line entry point: render a compose file as an SVG or PowerPoint diagram."""

from __future__ import annotations

from pathlib import Path

import click
import pydantic

from compose_diagram import __version__
from compose_diagram.api import build_plan
from compose_diagram.config.logging import configure_logging, get_logger
from compose_diagram.config.models import DEFAULT_LAYOUT, LayoutConfig
from compose_diagram.errors import DiagramError
from compose_diagram.manifest import parse_compose
from compose_diagram.renderers.pptx import ConnectorMode, PptxRenderer
from compose_diagram.renderers.svg import SvgRenderer
from compose_diagram.types import DiagramPlan

log = get_logger(__name__)


def _layout_options(func):
    func = click.option(
        "--canvas-width",
        type=float,
        default=DEFAULT_LAYOUT.canvas_width,
        show_default=True,
        help="Canvas width rows are centred in.",
    )(func)
    func = click.option(
        "--max-per-row",
        type=int,
        default=DEFAULT_LAYOUT.max_nodes_per_row,
        show_default=True,
        help="Maximum nodes per row before a tier wraps.",
    )(func)
    return func


def _plan_from_file(path: Path, max_per_row: int, canvas_width: float) -> DiagramPlan:
    try:
        config = LayoutConfig(
            **{
                **DEFAULT_LAYOUT.model_dump(),
                "max_nodes_per_row": max_per_row,
                "canvas_width": canvas_width,
            }
        )
        nodes = parse_compose(path.read_text(encoding="utf-8"))
        return build_plan(nodes, config)
    except (DiagramError, pydantic.ValidationError) as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(version=__version__, prog_name="compose-diagram")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
def cli(verbose: bool, log_json: bool) -> None:
    """compose-diagram — tiered architecture diagrams from compose files."""
    configure_logging(verbose=verbose, log_json=log_json)


@cli.command()
@click.argument("compose_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the diagram here. SVG goes to stdout when omitted.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["svg", "pptx"]),
    default="svg",
    show_default=True,
    help="Output document type.",
)
@click.option(
    "--connectors",
    type=click.Choice([mode.value for mode in ConnectorMode]),
    default=ConnectorMode.LINE.value,
    show_default=True,
    help="pptx only: native line connectors or rotated bars.",
)
@_layout_options
def render(
    compose_file: Path,
    output: Path | None,
    fmt: str,
    connectors: str,
    max_per_row: int,
    canvas_width: float,
) -> None:
    """Render COMPOSE_FILE as an SVG diagram or a PowerPoint slide."""
    if fmt == "pptx" and output is None:
        raise click.UsageError("--output is required for --format pptx")

    plan = _plan_from_file(compose_file, max_per_row, canvas_width)
    if fmt == "pptx":
        data = PptxRenderer(connectors).render(plan)
        output.write_bytes(data)
        log.info("diagram.written", path=str(output), format=fmt, bytes=len(data))
        return

    svg = SvgRenderer().render(plan)
    if output is None:
        click.echo(svg)
        return
    output.write_text(svg + "\n", encoding="utf-8")
    log.info("diagram.written", path=str(output), format=fmt, bytes=len(svg))


@cli.command()
@click.argument("compose_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_layout_options
def plan(compose_file: Path, max_per_row: int, canvas_width: float) -> None:
    """Print the diagram plan for COMPOSE_FILE as JSON."""
    click.echo(_plan_from_file(compose_file, max_per_row, canvas_width).to_json(indent=2))
