"""The pipeline graph — root of everything the builder produces."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pipeforge.models.artifacts import Artifact
from pipeforge.models.policies import ExecutionIdentity
from pipeforge.models.stages import Action, BuildProject, Stage


class ManagedRepository(BaseModel):
    """A source repository the provisioner must create alongside the pipeline."""

    model_config = ConfigDict(frozen=True)

    name: str


class NotificationTopic(BaseModel):
    """A topic the approval gate publishes to."""

    model_config = ConfigDict(frozen=True)

    name: str


class PipelineGraph(BaseModel):
    """Ordered stages plus every resource declared while building them.

    Constructed once per configuration and immutable afterwards; it is the
    only thing handed to the provisioning collaborator.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    project_name: str
    restart_execution_on_update: bool = True
    stages: tuple[Stage, ...]
    artifacts: tuple[Artifact, ...] = ()
    identities: tuple[ExecutionIdentity, ...] = ()
    build_projects: tuple[BuildProject, ...] = ()
    repositories: tuple[ManagedRepository, ...] = ()
    topics: tuple[NotificationTopic, ...] = ()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def stage_names(self) -> list[str]:
        return [s.name for s in self.stages]

    def stage(self, name: str) -> Stage:
        for stage in self.stages:
            if stage.name == name:
                return stage
        raise KeyError(f"No stage named {name!r}")

    def action(self, name: str) -> Action:
        for stage in self.stages:
            for action in stage.actions:
                if action.name == name:
                    return action
        raise KeyError(f"No action named {name!r}")

    def artifact(self, name: str) -> Artifact:
        for artifact in self.artifacts:
            if artifact.name == name:
                return artifact
        raise KeyError(f"No artifact named {name!r}")

    def identity(self, name: str) -> ExecutionIdentity:
        for identity in self.identities:
            if identity.name == name:
                return identity
        raise KeyError(f"No execution identity named {name!r}")

    def build_project(self, name: str) -> BuildProject:
        for project in self.build_projects:
            if project.name == name:
                return project
        raise KeyError(f"No build project named {name!r}")
