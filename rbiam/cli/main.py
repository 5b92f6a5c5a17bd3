"""Click commands for exporting and inspecting traces offline.

A trace file holds one ``[kind] key`` reference per line, as emitted by the
traversal; blank lines are ignored. The access graph comes from a dump
written by ``rbiam.graph.persistence.dump``.
"""

from __future__ import annotations

from pathlib import Path

import click

from rbiam import __version__
from rbiam.config import load_config
from rbiam.errors import RbiamError
from rbiam.export import export_graph, export_raw
from rbiam.graph import AccessGraph, correlate, load
from rbiam.graph.persistence import DOCUMENT_KEYS
from rbiam.models.config import RbiamConfig
from rbiam.models.entities import EntityKind
from rbiam.observability.logging import get_logger, setup_logging


def _read_trace(path: Path) -> list[str]:
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def _load_graph(path: Path) -> AccessGraph:
    try:
        return load(path)
    except RbiamError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(__version__, prog_name="rbiam")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Override RBIAM_LOG_LEVEL.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Correlate Kubernetes workloads with the IAM roles they can assume."""
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if log_level is not None:
        config.log.level = log_level.lower()
    setup_logging(config.log)
    ctx.obj = config


@cli.command()
@click.argument("trace_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--graph",
    "graph_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Access graph dump (rbiam-dump-<ts>.json).",
)
@click.option(
    "--format",
    "formats",
    multiple=True,
    type=click.Choice(["raw", "dot"]),
    help="Artifact format(s) to write. Defaults to RBIAM_EXPORT_FORMATS.",
)
@click.option("--out-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.pass_obj
def export(obj: RbiamConfig, trace_file: Path, graph_file: Path, formats: tuple[str, ...], out_dir: Path | None) -> None:
    """Export TRACE_FILE as a raw record dump and/or a DOT graph."""
    log = get_logger("cli")
    graph = _load_graph(graph_file)
    trace = _read_trace(trace_file)
    directory = out_dir or Path(obj.export.output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    exporters = {"raw": export_raw, "dot": export_graph}
    for fmt in formats or obj.export.formats:
        try:
            path = exporters[fmt](trace, graph, directory)
        except RbiamError as exc:
            log.error("export_failed", format=fmt, error=str(exc))
            raise click.ClickException(str(exc)) from exc
        click.echo(str(path))


@cli.command()
@click.argument("trace_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--graph", "graph_file", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
def edges(trace_file: Path, graph_file: Path) -> None:
    """Print the edges correlated from TRACE_FILE, one per line."""
    graph = _load_graph(graph_file)
    try:
        found = correlate(_read_trace(trace_file), graph)
    except RbiamError as exc:
        raise click.ClickException(str(exc)) from exc
    for edge in found:
        click.echo(f"{edge.source} -[{edge.label}]-> {edge.target}")


@cli.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(graph_file: Path) -> None:
    """Print the number of entities per collection in GRAPH_FILE."""
    graph = _load_graph(graph_file)
    for kind in EntityKind:
        click.echo(f"{DOCUMENT_KEYS[kind]}: {len(graph.collection(kind))}")
