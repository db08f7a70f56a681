"""Rich terminal renderer for pipeline graphs.

Turns a ``PipelineGraph`` into Rich renderables: one table of stages and
actions with their artifact wiring, and one table of execution identities.

Color scheme
------------
- cyan      : source actions
- green     : build actions
- yellow    : approval gates
- magenta   : wildcard resources
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pipeforge.models.graph import PipelineGraph
from pipeforge.models.policies import ExecutionIdentity
from pipeforge.models.stages import Action, ActionKind

_KIND_STYLES: dict[ActionKind, str] = {
    ActionKind.SOURCE: "cyan",
    ActionKind.BUILD: "green",
    ActionKind.APPROVAL: "bold yellow",
}


class GraphRenderer:
    """Renders pipeline graphs as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_graph(self, graph: PipelineGraph, fingerprint: str = "") -> Panel:
        """Render a graph as a Panel holding the stage and identity tables."""
        summary_parts = [
            f"[bold]Project:[/bold] {graph.project_name}",
            f"[bold]Stages:[/bold] {len(graph.stages)}",
            f"[bold]Artifacts:[/bold] {len(graph.artifacts)}",
            f"[bold]Identities:[/bold] {len(graph.identities)}",
        ]
        if graph.repositories:
            names = ", ".join(r.name for r in graph.repositories)
            summary_parts.append(f"[bold]Repositories:[/bold] {names}")

        content = Group(
            self._build_stage_table(graph),
            Text(""),
            self._build_identity_table(graph.identities),
            Text(""),
            Text.from_markup("  |  ".join(summary_parts)),
        )
        return Panel(
            content,
            title=f"[bold]{graph.name}[/bold]",
            subtitle=fingerprint or None,
            border_style="blue",
            padding=(1, 2),
        )

    def _build_stage_table(self, graph: PipelineGraph) -> Table:
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("#", style="dim", width=3, justify="right")
        table.add_column("Stage", min_width=14)
        table.add_column("Action", min_width=14)
        table.add_column("Order", justify="right", width=5)
        table.add_column("Inputs")
        table.add_column("Outputs")
        table.add_column("Details")

        for i, stage in enumerate(graph.stages):
            for j, action in enumerate(stage.actions):
                style = _KIND_STYLES.get(action.kind, "")
                table.add_row(
                    str(i) if j == 0 else "",
                    stage.name if j == 0 else "",
                    f"[{style}]{action.name}[/{style}]",
                    str(action.run_order),
                    ", ".join(a.name for a in action.inputs) or "[dim]-[/dim]",
                    ", ".join(a.name for a in action.outputs) or "[dim]-[/dim]",
                    _action_details(action),
                )
        return table

    def _build_identity_table(self, identities: tuple[ExecutionIdentity, ...]) -> Table:
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("Identity", min_width=16)
        table.add_column("Actions")
        table.add_column("Resources")
        table.add_column("Conditioned", justify="center", width=11)

        for identity in identities:
            for k, statement in enumerate(identity.statements):
                resources = "\n".join(
                    f"[magenta]{r}[/magenta]" if r == "*" else r
                    for r in statement.resources
                )
                table.add_row(
                    identity.name if k == 0 else "",
                    "\n".join(statement.actions),
                    resources,
                    "[green]Yes[/green]" if statement.conditions else "[dim]No[/dim]",
                )
        return table

    def print_graph(self, graph: PipelineGraph, fingerprint: str = "") -> None:
        """Print a graph to the console."""
        self.console.print(self.render_graph(graph, fingerprint))


def _action_details(action: Action) -> str:
    parts: list[str] = [f"[dim]{action.provider}[/dim]"]
    if "branch" in action.configuration:
        parts.append(f"branch={action.configuration['branch']}")
    if "object_key" in action.configuration:
        parts.append(f"key={action.configuration['object_key']}")
    if action.environment_variables:
        parts.append(f"env={len(action.environment_variables)}")
    if action.kind == ActionKind.APPROVAL:
        parts.append(f"topic={action.configuration.get('notification_topic', '-')}")
    return " ".join(parts)
