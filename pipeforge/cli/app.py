"""Main Typer application — imports and registers all CLI commands.

Entry point: ``pipeforge`` (configured via pyproject.toml console_scripts).

Commands: synth, show, policies.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from pipeforge.cli.commands.policies import policies_cmd
from pipeforge.cli.commands.show import show_cmd
from pipeforge.cli.commands.synth import synth_cmd
from pipeforge.config import ProdConfig

app = typer.Typer(
    name="pipeforge",
    help="Pipeforge: delivery-pipeline topology and least-privilege policy synthesis.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="synth", help="Build the pipeline and write its manifest.")(synth_cmd)
app.command(name="show", help="Show the pipeline graph.")(show_cmd)
app.command(name="policies", help="Print synthesized IAM policy documents.")(policies_cmd)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging from settings before any command runs."""
    level = "DEBUG" if verbose else ProdConfig().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
