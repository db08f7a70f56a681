"""Tests for the stage graph builder."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from pipeforge.core.errors import ConfigurationError
from pipeforge.core.graph_builder import (
    MANIFEST_OBJECT_KEY,
    PIPELINE_NAME,
    PipelineBuilder,
    build_pipeline,
)
from pipeforge.core.hasher import graph_fingerprint
from pipeforge.models.config import DeploymentContext, PipelineConfig
from pipeforge.models.graph import PipelineGraph
from pipeforge.models.stages import ActionKind


class TestStageLayout:
    def test_four_stages_in_fixed_order(self, graph: PipelineGraph):
        assert graph.stage_names == ["Source", "CI", "ModelPipeline", "Deploy"]

    def test_pipeline_settings(self, graph: PipelineGraph):
        assert graph.name == PIPELINE_NAME
        assert graph.project_name == "demo"
        assert graph.restart_execution_on_update is True

    def test_source_stage(self, graph: PipelineGraph):
        source = graph.stage("Source")
        assert [a.name for a in source.actions] == ["SourceCode", "SourceData"]
        data = source.action("SourceData")
        assert data.provider == "S3"
        assert data.configuration == {"bucket": "manifests", "object_key": MANIFEST_OBJECT_KEY}
        assert [o.name for o in data.outputs] == ["SourceDataOutput"]

    def test_ci_stage(self, graph: PipelineGraph):
        (build,) = graph.stage("CI").actions
        assert build.input.name == "SourceCodeOutput"
        assert [a.name for a in build.extra_inputs] == ["SourceDataOutput"]
        assert [o.name for o in build.outputs] == ["BuildOutput"]
        project = graph.build_project(build.project)
        assert project.privileged is True
        assert project.buildspec == "./buildspecs/build.yml"
        assert project.role is None

    def test_model_pipeline_stage(self, graph: PipelineGraph):
        (action,) = graph.stage("ModelPipeline").actions
        assert action.input.name == "BuildOutput"
        assert [o.name for o in action.outputs] == ["PipelineOutput"]
        assert action.environment_variables == {
            "SAGEMAKER_ARTIFACT_BUCKET": "artifacts",
            "SAGEMAKER_PIPELINE_ROLE_ARN": "exec-role",
            "SAGEMAKER_PROJECT_NAME": "demo",
        }
        project = graph.build_project(action.project)
        assert project.buildspec == "./buildspecs/pipeline.yml"
        assert project.privileged is False
        assert project.role == "ModelPipelineRole"

    def test_deploy_stage(self, graph: PipelineGraph):
        approval, deploy = graph.stage("Deploy").actions
        assert approval.kind == ActionKind.APPROVAL
        assert approval.run_order < deploy.run_order
        assert (approval.run_order, deploy.run_order) == (1, 2)
        assert deploy.input.name == "BuildOutput"
        assert [a.name for a in deploy.extra_inputs] == ["PipelineOutput"]
        assert deploy.outputs == ()
        project = graph.build_project(deploy.project)
        assert project.buildspec == "./buildspecs/deploy.yml"
        assert project.privileged is True
        assert project.role == "DeployRole"

    def test_identities_attached(self, graph: PipelineGraph):
        assert [i.name for i in graph.identities] == ["ModelPipelineRole", "DeployRole"]

    def test_approval_topic_declared(self, graph: PipelineGraph):
        assert [t.name for t in graph.topics] == ["ModelDeploymentApprovalTopic"]


class TestArtifacts:
    def test_artifact_records(self, graph: PipelineGraph):
        assert [a.name for a in graph.artifacts] == [
            "SourceCodeOutput", "SourceDataOutput", "BuildOutput", "PipelineOutput",
        ]
        assert graph.artifact("SourceCodeOutput").producer == "SourceCode"
        assert graph.artifact("SourceDataOutput").consumers == ("CIBuild",)
        assert graph.artifact("BuildOutput").producer == "CIBuild"
        assert graph.artifact("BuildOutput").consumers == ("ModelPipeline", "Deploy")
        assert graph.artifact("PipelineOutput").consumers == ("Deploy",)


class TestSourceVariants:
    def test_git_branch_defaults_to_main(self, graph: PipelineGraph):
        assert graph.action("SourceCode").configuration["branch"] == "main"
        assert graph.repositories == ()

    def test_codecommit_declares_one_repository(
        self, codecommit_config: PipelineConfig, context: DeploymentContext
    ):
        graph = build_pipeline(codecommit_config, context)
        assert len(graph.repositories) == 1
        assert graph.action("SourceCode").configuration["branch"] == "main"

    @pytest.mark.parametrize("repo_type", ["github", "s3", "", "CodeCommit"])
    def test_unknown_repo_type_fails(
        self, repo_type: str, make_config_data: Callable[..., dict[str, Any]]
    ):
        with pytest.raises(ConfigurationError):
            build_pipeline(make_config_data(repo_type))


class TestValidation:
    def test_accepts_raw_mapping(self, make_config_data: Callable[..., dict[str, Any]]):
        graph = build_pipeline(make_config_data("git"))
        assert graph.stage_names[0] == "Source"

    @pytest.mark.parametrize(
        "field", ["project_name", "artifact_bucket", "execution_role", "manifest_bucket"]
    )
    def test_blank_required_field_fails_before_any_stage(
        self, field: str, git_config: PipelineConfig
    ):
        config = PipelineConfig.model_construct(**{**git_config.__dict__, field: " "})
        with pytest.raises(ConfigurationError, match="Missing required configuration"):
            build_pipeline(config)

    def test_missing_source_fails(self, git_config: PipelineConfig):
        fields = {k: v for k, v in git_config.__dict__.items() if k != "source"}
        with pytest.raises(ConfigurationError, match="repoType"):
            build_pipeline(PipelineConfig.model_construct(**fields))

    def test_non_mapping_config_fails(self):
        with pytest.raises(ConfigurationError):
            build_pipeline(None)

    def test_git_section_cannot_override_repo_type(
        self, make_config_data: Callable[..., dict[str, Any]]
    ):
        data = make_config_data("git")
        data["git"] = {**data["git"], "repo_type": "codecommit"}
        with pytest.raises(ConfigurationError, match="repoType"):
            build_pipeline(data)


class TestDeterminism:
    def test_idempotent(self, git_config: PipelineConfig, context: DeploymentContext):
        first = build_pipeline(git_config, context)
        second = build_pipeline(git_config, context)
        assert first == second
        assert first is not second
        assert graph_fingerprint(first) == graph_fingerprint(second)

    def test_builder_is_reusable(self, git_config: PipelineConfig, context: DeploymentContext):
        builder = PipelineBuilder(context)
        assert builder.build(git_config) == builder.build(git_config)

    def test_context_changes_fingerprint(self, git_config: PipelineConfig, context: DeploymentContext):
        other = context.model_copy(update={"region": "us-east-1"})
        assert graph_fingerprint(build_pipeline(git_config, context)) != graph_fingerprint(
            build_pipeline(git_config, other)
        )

    def test_default_context(self, git_config: PipelineConfig):
        assert PipelineBuilder().context == DeploymentContext()
        graph = build_pipeline(git_config)
        assert "${AWS::Region}" in graph.identity("ModelPipelineRole").resources[2]

    def test_graph_frozen(self, graph: PipelineGraph):
        with pytest.raises(Exception):
            graph.stages = ()
