"""Shared test fixtures for Pipeforge."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pipeforge.core.draft import GraphDraft
from pipeforge.core.graph_builder import build_pipeline
from pipeforge.models.config import DeploymentContext, PipelineConfig
from pipeforge.models.graph import PipelineGraph


@pytest.fixture
def context() -> DeploymentContext:
    """Provide a concrete deployment context."""
    return DeploymentContext(account="123456789012", region="eu-west-1")


@pytest.fixture
def make_config_data() -> Callable[..., dict[str, Any]]:
    """Factory fixture: build a raw config document with sensible defaults."""

    def _factory(repo_type: str = "git", **overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "projectName": "demo",
            "repoType": repo_type,
            "dataManifestBucket": "manifests",
            "sageMakerArtifactBucket": "artifacts",
            "sageMakerExecutionRole": "exec-role",
        }
        if repo_type == "git":
            data["git"] = {
                "githubConnectionArn": "conn1",
                "githubRepoOwner": "acme",
                "githubRepoName": "ml-repo",
            }
        data.update(overrides)
        return data

    return _factory


@pytest.fixture
def git_config(make_config_data: Callable[..., dict[str, Any]]) -> PipelineConfig:
    """Git-sourced config with the branch left unset."""
    return PipelineConfig.from_mapping(make_config_data("git"))


@pytest.fixture
def codecommit_config(make_config_data: Callable[..., dict[str, Any]]) -> PipelineConfig:
    """Config whose source is a managed CodeCommit repository."""
    return PipelineConfig.from_mapping(make_config_data("codecommit"))


@pytest.fixture
def graph(git_config: PipelineConfig, context: DeploymentContext) -> PipelineGraph:
    """A fully built pipeline graph for the git config."""
    return build_pipeline(git_config, context)


@pytest.fixture
def draft() -> GraphDraft:
    """Provide an empty graph draft."""
    return GraphDraft("TestPipeline", "demo")


@pytest.fixture
def config_file(tmp_path: Path, make_config_data: Callable[..., dict[str, Any]]) -> Path:
    """Write the default git config document to a JSON file."""
    path = tmp_path / "pipeline.json"
    path.write_text(json.dumps(make_config_data("git")))
    return path
