"""``pipeforge synth CONFIG`` — build the pipeline graph and write its manifest.

Builds the graph, hands it to the ManifestProvisioner, and prints the
manifest path and graph fingerprint.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from pipeforge.cli.commands._shared import build_from_file, resolve_context
from pipeforge.config import ProdConfig
from pipeforge.core.hasher import graph_fingerprint
from pipeforge.provisioning.manifest import ManifestProvisioner

console = Console()


def synth_cmd(
    config_file: Path = typer.Argument(
        ...,
        help="Pipeline description (JSON or TOML).",
    ),
    account: str = typer.Option(None, "--account", help="Deployment account id."),
    region: str = typer.Option(None, "--region", help="Deployment region."),
    output_dir: Path = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the pipeline manifest.",
    ),
) -> None:
    """Build the pipeline and write its manifest for the provisioner."""
    settings = ProdConfig()
    context = resolve_context(settings, account=account, region=region)
    graph = build_from_file(config_file, context)

    provisioner = ManifestProvisioner(output_dir or settings.output_dir)
    manifest_path = provisioner.provision(graph)
    fingerprint = graph_fingerprint(graph)

    console.print()
    console.print(
        Panel(
            "\n".join([
                "[bold green]Pipeline synthesized![/bold green]",
                "",
                f"[bold]Project:[/bold]      {graph.project_name}",
                f"[bold]Stages:[/bold]       {' -> '.join(graph.stage_names)}",
                f"[bold]Identities:[/bold]   {', '.join(i.name for i in graph.identities)}",
                f"[bold]Manifest:[/bold]     {manifest_path}",
            ]),
            title="[bold]Pipeforge[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
    console.print()

    # Print the fingerprint plainly for scripting
    console.print(f"[bold]{fingerprint}[/bold]")
