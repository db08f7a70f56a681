"""Artifact models — named placeholders for data flowing between stages."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ArtifactRef(BaseModel):
    """A reference to a pipeline artifact, carried on action inputs and outputs."""

    model_config = ConfigDict(frozen=True)

    name: str


class Artifact(BaseModel):
    """The registry record for an artifact.

    ``producer`` and ``consumers`` hold action names, never action objects,
    so the graph has no ownership cycles.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    producer: str | None = None
    consumers: tuple[str, ...] = ()

    @property
    def ref(self) -> ArtifactRef:
        return ArtifactRef(name=self.name)


# Artifact names used by the standard delivery pipeline.
SOURCE_CODE_OUTPUT = "SourceCodeOutput"
SOURCE_DATA_OUTPUT = "SourceDataOutput"
BUILD_OUTPUT = "BuildOutput"
PIPELINE_OUTPUT = "PipelineOutput"
