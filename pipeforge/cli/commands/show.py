"""``pipeforge show CONFIG`` — display the pipeline graph as Rich tables."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pipeforge.cli.commands._shared import build_from_file, resolve_context
from pipeforge.config import ProdConfig
from pipeforge.core.hasher import graph_fingerprint
from pipeforge.render.console import GraphRenderer

console = Console()


def show_cmd(
    config_file: Path = typer.Argument(
        ...,
        help="Pipeline description (JSON or TOML).",
    ),
    account: str = typer.Option(None, "--account", help="Deployment account id."),
    region: str = typer.Option(None, "--region", help="Deployment region."),
) -> None:
    """Show stages, actions, artifact wiring and identities for a pipeline."""
    context = resolve_context(ProdConfig(), account=account, region=region)
    graph = build_from_file(config_file, context)
    GraphRenderer(console).print_graph(graph, graph_fingerprint(graph))
