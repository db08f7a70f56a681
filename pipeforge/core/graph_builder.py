"""Stage graph builder — assembles the four-stage delivery pipeline.

The builder wires together the ArtifactRegistry, source selector, permission
synthesizer and approval gate into a single deterministic build:

    Source -> CI -> ModelPipeline -> Deploy

Construction is all-or-nothing: any error propagates and no partial graph
is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pipeforge.core.approval_gate import APPROVAL_TOPIC_NAME, approval_action, gate_deploy_stage
from pipeforge.core.draft import GraphDraft
from pipeforge.core.errors import ConfigurationError
from pipeforge.core.permission_synthesizer import synthesize
from pipeforge.core.source_selector import select_source
from pipeforge.core.topology import verify_artifact_flow
from pipeforge.models.artifacts import (
    BUILD_OUTPUT,
    PIPELINE_OUTPUT,
    SOURCE_CODE_OUTPUT,
    SOURCE_DATA_OUTPUT,
)
from pipeforge.models.config import DeploymentContext, PipelineConfig
from pipeforge.models.graph import PipelineGraph
from pipeforge.models.stages import Action, ActionKind, BuildProject, StageKind

logger = logging.getLogger(__name__)

PIPELINE_NAME = "MLOpsPipeline"
MANIFEST_OBJECT_KEY = "manifest.json.zip"

CI_BUILDSPEC = "./buildspecs/build.yml"
MODEL_PIPELINE_BUILDSPEC = "./buildspecs/pipeline.yml"
DEPLOY_BUILDSPEC = "./buildspecs/deploy.yml"

_REQUIRED_FIELDS = {
    "project_name": "projectName",
    "artifact_bucket": "sageMakerArtifactBucket",
    "manifest_bucket": "dataManifestBucket",
    "execution_role": "sageMakerExecutionRole",
}


class PipelineBuilder:
    """Builds a :class:`PipelineGraph` from a :class:`PipelineConfig`.

    Parameters
    ----------
    context:
        Account/region context for resource patterns.  Uses CloudFormation
        pseudo-parameters if not provided.
    """

    def __init__(self, context: DeploymentContext | None = None) -> None:
        self.context = context or DeploymentContext()

    def build(self, config: PipelineConfig | Mapping[str, Any]) -> PipelineGraph:
        """Build the pipeline graph for ``config``.

        Raises
        ------
        ConfigurationError
            If a required field is missing or the source variant is unknown.
        """
        if not isinstance(config, PipelineConfig):
            config = PipelineConfig.from_mapping(config)
        _validate_required(config)

        logger.info("Building pipeline %s for project %s", PIPELINE_NAME, config.project_name)
        draft = GraphDraft(PIPELINE_NAME, config.project_name)

        self._add_source_stage(draft, config)
        self._add_ci_stage(draft)
        self._add_model_pipeline_stage(draft, config)
        self._add_deploy_stage(draft, config)

        graph = draft.freeze()
        verify_artifact_flow(graph)
        logger.info(
            "Built pipeline %s: %d stages, %d artifacts, %d identities",
            graph.name,
            len(graph.stages),
            len(graph.artifacts),
            len(graph.identities),
        )
        return graph

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _add_source_stage(self, draft: GraphDraft, config: PipelineConfig) -> None:
        source_code = select_source(config, draft)
        source_data = Action(
            name="SourceData",
            kind=ActionKind.SOURCE,
            provider="S3",
            outputs=(draft.registry.declare(SOURCE_DATA_OUTPUT),),
            configuration={
                "bucket": config.manifest_bucket,
                "object_key": MANIFEST_OBJECT_KEY,
            },
        )
        draft.add_stage(StageKind.SOURCE, [source_code, source_data])

    def _add_ci_stage(self, draft: GraphDraft) -> None:
        # Privileged: the CI build runs nested provisioning tooling (docker).
        project = draft.add_build_project(
            BuildProject(name="CIBuild", buildspec=CI_BUILDSPEC, privileged=True)
        )
        build = Action(
            name="CIBuild",
            kind=ActionKind.BUILD,
            provider="CodeBuild",
            project=project.name,
            input=draft.registry.get(SOURCE_CODE_OUTPUT).ref,
            extra_inputs=(draft.registry.get(SOURCE_DATA_OUTPUT).ref,),
            outputs=(draft.registry.declare(BUILD_OUTPUT),),
        )
        draft.add_stage(StageKind.CI, [build])

    def _add_model_pipeline_stage(self, draft: GraphDraft, config: PipelineConfig) -> None:
        identity = draft.add_identity(
            synthesize(StageKind.MODEL_PIPELINE, config, self.context)
        )
        project = draft.add_build_project(
            BuildProject(
                name="ModelPipeline",
                buildspec=MODEL_PIPELINE_BUILDSPEC,
                role=identity.name,
            )
        )
        model_pipeline = Action(
            name="ModelPipeline",
            kind=ActionKind.BUILD,
            provider="CodeBuild",
            project=project.name,
            input=draft.registry.get(BUILD_OUTPUT).ref,
            outputs=(draft.registry.declare(PIPELINE_OUTPUT),),
            environment_variables={
                "SAGEMAKER_ARTIFACT_BUCKET": config.artifact_bucket,
                "SAGEMAKER_PIPELINE_ROLE_ARN": config.execution_role,
                "SAGEMAKER_PROJECT_NAME": config.project_name,
            },
        )
        draft.add_stage(StageKind.MODEL_PIPELINE, [model_pipeline])

    def _add_deploy_stage(self, draft: GraphDraft, config: PipelineConfig) -> None:
        topic = draft.declare_topic(APPROVAL_TOPIC_NAME)
        approval = approval_action(config, self.context, topic, run_order=1)

        identity = draft.add_identity(synthesize(StageKind.DEPLOY, config, self.context))
        project = draft.add_build_project(
            BuildProject(
                name="DeployProject",
                buildspec=DEPLOY_BUILDSPEC,
                privileged=True,
                role=identity.name,
            )
        )
        deploy = Action(
            name="Deploy",
            kind=ActionKind.BUILD,
            provider="CodeBuild",
            project=project.name,
            run_order=2,
            input=draft.registry.get(BUILD_OUTPUT).ref,
            extra_inputs=(draft.registry.get(PIPELINE_OUTPUT).ref,),
        )
        draft.add_stage(StageKind.DEPLOY, gate_deploy_stage(approval, deploy))


def _validate_required(config: PipelineConfig) -> None:
    missing = [
        alias
        for field, alias in _REQUIRED_FIELDS.items()
        if not str(getattr(config, field, "") or "").strip()
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}"
        )
    if getattr(config, "source", None) is None:
        raise ConfigurationError("Missing required configuration: repoType")


def build_pipeline(
    config: PipelineConfig | Mapping[str, Any],
    context: DeploymentContext | None = None,
) -> PipelineGraph:
    """Build the pipeline graph for ``config`` (see :meth:`PipelineBuilder.build`)."""
    return PipelineBuilder(context).build(config)
