"""Pipeforge data models — all Pydantic v2, all frozen (immutable)."""

from pipeforge.models.artifacts import Artifact, ArtifactRef
from pipeforge.models.config import (
    CodeCommitSource,
    DeploymentContext,
    GitSource,
    PipelineConfig,
    SourceConfig,
)
from pipeforge.models.graph import ManagedRepository, NotificationTopic, PipelineGraph
from pipeforge.models.policies import Effect, ExecutionIdentity, PolicyStatement
from pipeforge.models.stages import (
    STAGE_ORDER,
    Action,
    ActionKind,
    BuildProject,
    Stage,
    StageKind,
)

__all__ = [
    # config
    "CodeCommitSource",
    "GitSource",
    "SourceConfig",
    "PipelineConfig",
    "DeploymentContext",
    # artifacts
    "Artifact",
    "ArtifactRef",
    # stages
    "ActionKind",
    "StageKind",
    "STAGE_ORDER",
    "Action",
    "Stage",
    "BuildProject",
    # policies
    "Effect",
    "PolicyStatement",
    "ExecutionIdentity",
    # graph
    "ManagedRepository",
    "NotificationTopic",
    "PipelineGraph",
]
