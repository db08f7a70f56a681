"""Pipeforge exception hierarchy.

Every error raised while building a pipeline graph is fatal: the graph is a
static declaration, so nothing here is ever retried.
"""

from __future__ import annotations


class PipeforgeError(Exception):
    """Base exception for all Pipeforge errors."""


class ConfigurationError(PipeforgeError, ValueError):
    """A required configuration field is missing or invalid."""


class DuplicateArtifactError(PipeforgeError, RuntimeError):
    """Two actions declared an output artifact with the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Artifact '{name}' is already declared in this pipeline")


class ArtifactOrderError(PipeforgeError, RuntimeError):
    """An action consumes an artifact not produced by an earlier stage."""

    def __init__(self, stage: str, action: str, artifact: str) -> None:
        self.stage = stage
        self.action = action
        self.artifact = artifact
        super().__init__(
            f"Action {action} in stage {stage} consumes '{artifact}', "
            f"which no earlier stage produces"
        )


class ApprovalOrderError(PipeforgeError, RuntimeError):
    """The approval gate does not run strictly before the action it guards."""


class UnsupportedStageKindError(PipeforgeError, ValueError):
    """No dedicated execution identity exists for the requested stage kind."""
