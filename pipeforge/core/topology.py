"""Artifact-flow check over a finished pipeline graph.

Stages run strictly in declaration order, so an action in stage N may only
read artifacts produced by stages 0..N-1.  The check is linear; the topology
is a fixed chain, so no cycle detection is needed.
"""

from __future__ import annotations

from pipeforge.core.errors import ArtifactOrderError
from pipeforge.models.graph import PipelineGraph


def verify_artifact_flow(graph: PipelineGraph) -> None:
    """Raise ``ArtifactOrderError`` on the first forward artifact reference."""
    produced: set[str] = set()
    for stage in graph.stages:
        for action in stage.actions:
            for artifact in action.inputs:
                if artifact.name not in produced:
                    raise ArtifactOrderError(stage.name, action.name, artifact.name)
        produced.update(o.name for a in stage.actions for o in a.outputs)


def producing_stage(graph: PipelineGraph, artifact_name: str) -> str:
    """Return the name of the stage whose action produces ``artifact_name``."""
    for stage in graph.stages:
        for action in stage.actions:
            if any(o.name == artifact_name for o in action.outputs):
                return stage.name
    raise KeyError(f"No stage produces artifact {artifact_name!r}")
