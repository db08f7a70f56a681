"""Build-time collector for everything a pipeline graph declares.

A ``GraphDraft`` is owned by exactly one ``build`` call.  Components add
stages and resources to it in pipeline order; :meth:`GraphDraft.freeze`
turns it into the immutable :class:`PipelineGraph`.
"""

from __future__ import annotations

import logging

from pipeforge.core.artifact_registry import ArtifactRegistry
from pipeforge.models.graph import ManagedRepository, NotificationTopic, PipelineGraph
from pipeforge.models.policies import ExecutionIdentity
from pipeforge.models.stages import Action, BuildProject, Stage, StageKind

logger = logging.getLogger(__name__)


class GraphDraft:
    """Mutable draft of a pipeline graph.

    Parameters
    ----------
    name:
        Pipeline name.
    project_name:
        The project the pipeline delivers.
    """

    def __init__(self, name: str, project_name: str) -> None:
        self.name = name
        self.project_name = project_name
        self.registry = ArtifactRegistry()
        self._stages: list[Stage] = []
        self._identities: list[ExecutionIdentity] = []
        self._build_projects: list[BuildProject] = []
        self._repositories: list[ManagedRepository] = []
        self._topics: list[NotificationTopic] = []

    # ------------------------------------------------------------------
    # Resource declarations
    # ------------------------------------------------------------------

    def declare_repository(self, name: str) -> ManagedRepository:
        repository = ManagedRepository(name=name)
        self._repositories.append(repository)
        logger.debug("Declared managed repository %s", name)
        return repository

    def declare_topic(self, name: str) -> NotificationTopic:
        topic = NotificationTopic(name=name)
        self._topics.append(topic)
        return topic

    def add_identity(self, identity: ExecutionIdentity) -> ExecutionIdentity:
        self._identities.append(identity)
        logger.debug(
            "Attached identity %s with %d statements",
            identity.name,
            len(identity.statements),
        )
        return identity

    def add_build_project(self, project: BuildProject) -> BuildProject:
        self._build_projects.append(project)
        return project

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def add_stage(self, kind: StageKind, actions: list[Action]) -> Stage:
        """Append a stage and record artifact production and consumption."""
        for action in actions:
            for artifact in action.inputs:
                self.registry.record_consumption(artifact, action.name)
            for artifact in action.outputs:
                self.registry.record_production(artifact, action.name)

        stage = Stage(name=kind.value, kind=kind, actions=tuple(actions))
        self._stages.append(stage)
        logger.debug(
            "Added stage %s with actions %s",
            stage.name,
            [a.name for a in stage.actions],
        )
        return stage

    def freeze(self) -> PipelineGraph:
        """Return the immutable graph for everything declared so far."""
        return PipelineGraph(
            name=self.name,
            project_name=self.project_name,
            stages=tuple(self._stages),
            artifacts=self.registry.snapshot(),
            identities=tuple(self._identities),
            build_projects=tuple(self._build_projects),
            repositories=tuple(self._repositories),
            topics=tuple(self._topics),
        )
