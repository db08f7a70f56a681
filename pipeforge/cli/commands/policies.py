"""``pipeforge policies CONFIG`` — print synthesized IAM policy documents."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from pipeforge.cli.commands._shared import build_from_file, err_console, resolve_context
from pipeforge.config import ProdConfig

console = Console()


def policies_cmd(
    config_file: Path = typer.Argument(
        ...,
        help="Pipeline description (JSON or TOML).",
    ),
    identity: str = typer.Option(
        None,
        "--identity",
        "-i",
        help="Only print the policy for this execution identity.",
    ),
    account: str = typer.Option(None, "--account", help="Deployment account id."),
    region: str = typer.Option(None, "--region", help="Deployment region."),
) -> None:
    """Print the policy document of each execution identity as JSON."""
    context = resolve_context(ProdConfig(), account=account, region=region)
    graph = build_from_file(config_file, context)

    if identity:
        try:
            identities = [graph.identity(identity)]
        except KeyError:
            known = ", ".join(i.name for i in graph.identities)
            err_console.print(
                f"[bold red]Unknown identity:[/bold red] {identity} (known: {known})"
            )
            raise typer.Exit(code=1)
    else:
        identities = list(graph.identities)

    documents = {i.name: i.policy_document() for i in identities}
    console.print_json(json.dumps(documents))
