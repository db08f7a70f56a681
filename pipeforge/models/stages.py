"""Stage and action models for the delivery pipeline topology."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from pipeforge.models.artifacts import ArtifactRef
from pipeforge.models.mappings import StringMap


class ActionKind(str, Enum):
    """The unit-of-work categories an action can belong to."""

    SOURCE = "source"
    BUILD = "build"
    APPROVAL = "approval"


class StageKind(str, Enum):
    """The fixed stage kinds of the delivery pipeline, in execution order."""

    SOURCE = "Source"
    CI = "CI"
    MODEL_PIPELINE = "ModelPipeline"
    DEPLOY = "Deploy"


# Stages always run in this order.
STAGE_ORDER: tuple[StageKind, ...] = (
    StageKind.SOURCE,
    StageKind.CI,
    StageKind.MODEL_PIPELINE,
    StageKind.DEPLOY,
)


class Action(BaseModel):
    """A single unit of work inside a stage.

    ``configuration`` carries provider-specific literals (repository owner,
    bucket key, approval message).  ``environment_variables`` are plaintext
    values exported to build actions.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ActionKind
    provider: str
    input: ArtifactRef | None = None
    extra_inputs: tuple[ArtifactRef, ...] = ()
    outputs: tuple[ArtifactRef, ...] = ()
    run_order: int = 1
    environment_variables: StringMap = Field(default_factory=dict, validate_default=True)
    configuration: StringMap = Field(default_factory=dict, validate_default=True)
    project: str | None = None  # build project name, build actions only

    @property
    def inputs(self) -> tuple[ArtifactRef, ...]:
        """Primary input followed by extra inputs."""
        if self.input is None:
            return self.extra_inputs
        return (self.input, *self.extra_inputs)


class Stage(BaseModel):
    """An ordered, named group of actions executed together."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: StageKind
    actions: tuple[Action, ...]

    def action(self, name: str) -> Action:
        for action in self.actions:
            if action.name == name:
                return action
        raise KeyError(f"Stage {self.name} has no action named {name!r}")


class BuildProject(BaseModel):
    """The build environment a build action runs in."""

    model_config = ConfigDict(frozen=True)

    name: str
    buildspec: str  # opaque path into the source tree
    build_image: str = "aws/codebuild/standard:5.0"
    privileged: bool = False
    role: str | None = None  # execution identity name; None = provisioner default
