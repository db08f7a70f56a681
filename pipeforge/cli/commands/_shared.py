"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from pipeforge.config import ProdConfig
from pipeforge.core.config_loader import load_pipeline_config
from pipeforge.core.errors import PipeforgeError
from pipeforge.core.graph_builder import build_pipeline
from pipeforge.models.config import DeploymentContext
from pipeforge.models.graph import PipelineGraph

err_console = Console(stderr=True)


def resolve_context(
    settings: ProdConfig,
    *,
    account: str | None = None,
    region: str | None = None,
) -> DeploymentContext:
    """Settings-derived deployment context with CLI overrides applied."""
    context = settings.deployment_context()
    overrides = {k: v for k, v in {"account": account, "region": region}.items() if v}
    return context.model_copy(update=overrides) if overrides else context


def build_from_file(config_file: Path, context: DeploymentContext) -> PipelineGraph:
    """Load and build, exiting with status 1 on any Pipeforge error."""
    try:
        return build_pipeline(load_pipeline_config(config_file), context)
    except PipeforgeError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
