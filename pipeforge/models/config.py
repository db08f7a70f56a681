"""Pipeline configuration models — the single immutable input to the builder."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pipeforge.core.errors import ConfigurationError

# SageMaker pipeline names: alphanumerics separated by single or repeated hyphens.
PROJECT_NAME_PATTERN = r"^[A-Za-z0-9](-*[A-Za-z0-9])*$"

DEFAULT_BRANCH = "main"

# IAM and S3 wildcard characters; never allowed in a resource reference.
RESOURCE_WILDCARDS = frozenset("*?")


class CodeCommitSource(BaseModel):
    """Source code lives in a managed CodeCommit repository created with the pipeline."""

    model_config = ConfigDict(frozen=True)

    repo_type: Literal["codecommit"] = "codecommit"


class GitSource(BaseModel):
    """Source code lives in an external Git host reached through a connection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    repo_type: Literal["git"] = "git"
    connection_arn: str = Field(alias="githubConnectionArn", min_length=1)
    owner: str = Field(alias="githubRepoOwner", min_length=1)
    repo: str = Field(alias="githubRepoName", min_length=1)
    branch: str = Field(default=DEFAULT_BRANCH, alias="githubRepoBranch")

    @field_validator("branch", mode="before")
    @classmethod
    def _default_branch(cls, value: Any) -> Any:
        if value is None or value == "":
            return DEFAULT_BRANCH
        return value


SourceConfig = Annotated[
    Union[CodeCommitSource, GitSource],
    Field(discriminator="repo_type"),
]


class DeploymentContext(BaseModel):
    """Account/region context supplied by the provisioning collaborator.

    Defaults are CloudFormation pseudo-parameters, resolved at deploy time.
    """

    model_config = ConfigDict(frozen=True)

    account: str = Field(default="${AWS::AccountId}", min_length=1)
    region: str = Field(default="${AWS::Region}", min_length=1)
    partition: str = Field(default="aws", min_length=1)


class PipelineConfig(BaseModel):
    """Project-level description of the delivery pipeline.

    Accepts the flat camelCase document shape used in project config files
    (``projectName``, ``repoType``, ``git``, ``dataManifestBucket``,
    ``sageMakerArtifactBucket``, ``sageMakerExecutionRole``) through
    :meth:`from_mapping`, or snake_case keyword arguments directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_name: str = Field(alias="projectName", pattern=PROJECT_NAME_PATTERN)
    artifact_bucket: str = Field(alias="sageMakerArtifactBucket")
    manifest_bucket: str = Field(alias="dataManifestBucket")
    execution_role: str = Field(alias="sageMakerExecutionRole")
    source: SourceConfig

    @field_validator("artifact_bucket", "manifest_bucket", "execution_role")
    @classmethod
    def _no_wildcards(cls, value: str) -> str:
        if RESOURCE_WILDCARDS & set(value):
            raise ValueError(f"{value!r} contains a wildcard character")
        return value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PipelineConfig:
        """Parse a config document, folding ``repoType``/``git`` into ``source``.

        Raises
        ------
        ConfigurationError
            If ``data`` is not a mapping, a required field is missing, a value
            is malformed, or ``repoType`` names an unknown source variant.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Pipeline configuration must be a mapping, got {type(data).__name__}"
            )
        payload = dict(data)
        if "source" not in payload:
            repo_type = payload.pop("repoType", payload.pop("repo_type", None))
            if repo_type is None:
                raise ConfigurationError("repoType is required ('git' or 'codecommit')")
            source: dict[str, Any] = {"repo_type": repo_type}
            git = payload.pop("git", None)
            if repo_type == "git":
                if not isinstance(git, Mapping):
                    raise ConfigurationError("repoType 'git' requires a 'git' section")
                if "repo_type" in git or "repoType" in git:
                    raise ConfigurationError(
                        "repoType belongs at the top level, not in the 'git' section"
                    )
                source.update(git)
            payload["source"] = source
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(_describe_validation_error(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        problems.append(f"{location}: {err['msg']}")
    return "Invalid pipeline configuration: " + "; ".join(problems)
