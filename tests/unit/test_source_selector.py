"""Tests for the source strategy selector."""

from __future__ import annotations

import pytest

from pipeforge.core.draft import GraphDraft
from pipeforge.core.errors import ConfigurationError
from pipeforge.core.source_selector import MANAGED_REPOSITORY_NAME, select_source
from pipeforge.models.config import GitSource, PipelineConfig
from pipeforge.models.stages import ActionKind


class TestGitSource:
    def test_action_parameters(self, git_config: PipelineConfig, draft: GraphDraft):
        action = select_source(git_config, draft)
        assert action.name == "SourceCode"
        assert action.kind == ActionKind.SOURCE
        assert action.provider == "CodeStarSourceConnection"
        assert action.configuration == {
            "connection_arn": "conn1",
            "owner": "acme",
            "repo": "ml-repo",
            "branch": "main",
        }

    def test_single_fresh_output(self, git_config: PipelineConfig, draft: GraphDraft):
        action = select_source(git_config, draft)
        assert [o.name for o in action.outputs] == ["SourceCodeOutput"]
        assert "SourceCodeOutput" in draft.registry

    def test_explicit_branch(self, git_config: PipelineConfig, draft: GraphDraft):
        source = GitSource(connection_arn="conn1", owner="acme", repo="ml-repo", branch="dev")
        config = git_config.model_copy(update={"source": source})
        assert select_source(config, draft).configuration["branch"] == "dev"

    def test_no_repository_declared(self, git_config: PipelineConfig, draft: GraphDraft):
        select_source(git_config, draft)
        assert draft.freeze().repositories == ()


class TestCodeCommitSource:
    def test_declares_managed_repository(
        self, codecommit_config: PipelineConfig, draft: GraphDraft
    ):
        action = select_source(codecommit_config, draft)
        repositories = draft.freeze().repositories
        assert [r.name for r in repositories] == [MANAGED_REPOSITORY_NAME]
        assert action.configuration["repository"] == MANAGED_REPOSITORY_NAME

    def test_branch_is_main(self, codecommit_config: PipelineConfig, draft: GraphDraft):
        action = select_source(codecommit_config, draft)
        assert action.provider == "CodeCommit"
        assert action.configuration["branch"] == "main"


class TestMalformedSource:
    def test_unknown_variant_rejected(self, git_config: PipelineConfig, draft: GraphDraft):
        config = PipelineConfig.model_construct(
            **{**git_config.__dict__, "source": {"repo_type": "svn"}}
        )
        with pytest.raises(ConfigurationError, match="repoType"):
            select_source(config, draft)

    def test_nothing_declared_on_rejection(self, git_config: PipelineConfig, draft: GraphDraft):
        config = PipelineConfig.model_construct(
            **{**git_config.__dict__, "source": None}
        )
        with pytest.raises(ConfigurationError):
            select_source(config, draft)
        assert len(draft.registry) == 0
