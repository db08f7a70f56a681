"""The provisioner protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pipeforge.models.graph import PipelineGraph


@runtime_checkable
class Provisioner(Protocol):
    """Protocol for provisioning backends.

    Any object with a ``provision(graph) -> str`` method satisfies this
    protocol.  The return value identifies what was provisioned (a manifest
    path, a stack id, ...).
    """

    def provision(self, graph: PipelineGraph) -> str:
        """Materialize ``graph`` and return an identifier for the result."""
        ...
