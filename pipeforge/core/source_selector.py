"""Source strategy selector — the only place that looks at the source variant.

Given the configured source, yields the ``SourceCode`` action whose single
output is a freshly declared ``SourceCodeOutput`` artifact.  The rest of the
builder treats that action as opaque.
"""

from __future__ import annotations

import logging

from pipeforge.core.draft import GraphDraft
from pipeforge.core.errors import ConfigurationError
from pipeforge.models.artifacts import SOURCE_CODE_OUTPUT
from pipeforge.models.config import DEFAULT_BRANCH, CodeCommitSource, GitSource, PipelineConfig
from pipeforge.models.stages import Action, ActionKind

logger = logging.getLogger(__name__)

SOURCE_ACTION_NAME = "SourceCode"

# Name of the repository created when the pipeline manages its own source.
MANAGED_REPOSITORY_NAME = "MLOpsE2EDemo"


def select_source(config: PipelineConfig, draft: GraphDraft) -> Action:
    """Resolve the configured source variant into a source-pull action.

    Raises
    ------
    ConfigurationError
        If the source is neither a Git connection nor a managed repository.
    """
    source = config.source
    if isinstance(source, GitSource):
        action = _git_source_action(source, draft)
    elif isinstance(source, CodeCommitSource):
        action = _codecommit_source_action(draft)
    else:
        raise ConfigurationError(
            f"Unrecognized source configuration: {source!r}. "
            "Expected repoType 'git' or 'codecommit'."
        )

    logger.info(
        "Selected %s source on branch %s",
        action.provider,
        action.configuration["branch"],
    )
    return action


def _git_source_action(source: GitSource, draft: GraphDraft) -> Action:
    output = draft.registry.declare(SOURCE_CODE_OUTPUT)
    return Action(
        name=SOURCE_ACTION_NAME,
        kind=ActionKind.SOURCE,
        provider="CodeStarSourceConnection",
        outputs=(output,),
        configuration={
            "connection_arn": source.connection_arn,
            "owner": source.owner,
            "repo": source.repo,
            "branch": source.branch or DEFAULT_BRANCH,
        },
    )


def _codecommit_source_action(draft: GraphDraft) -> Action:
    repository = draft.declare_repository(MANAGED_REPOSITORY_NAME)
    output = draft.registry.declare(SOURCE_CODE_OUTPUT)
    return Action(
        name=SOURCE_ACTION_NAME,
        kind=ActionKind.SOURCE,
        provider="CodeCommit",
        outputs=(output,),
        configuration={
            "repository": repository.name,
            "branch": DEFAULT_BRANCH,
        },
    )
