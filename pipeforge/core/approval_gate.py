"""Approval gate — the manual approval that guards the deploy action.

Intra-stage run order only matters here: the approval must finish before
the deploy action in the same stage may start.
"""

from __future__ import annotations

from pipeforge.core import resource_patterns as patterns
from pipeforge.core.errors import ApprovalOrderError
from pipeforge.models.config import DeploymentContext, PipelineConfig
from pipeforge.models.graph import NotificationTopic
from pipeforge.models.stages import Action, ActionKind

APPROVAL_ACTION_NAME = "Approval"
APPROVAL_TOPIC_NAME = "ModelDeploymentApprovalTopic"


def approval_message(project_name: str) -> str:
    return f"A new version of the model for project {project_name} is waiting for approval"


def approval_action(
    config: PipelineConfig,
    context: DeploymentContext,
    topic: NotificationTopic,
    *,
    run_order: int = 1,
) -> Action:
    """Build the manual approval action that publishes to ``topic``."""
    return Action(
        name=APPROVAL_ACTION_NAME,
        kind=ActionKind.APPROVAL,
        provider="Manual",
        run_order=run_order,
        configuration={
            "notification_topic": topic.name,
            "additional_information": approval_message(config.project_name),
            "external_entity_link": patterns.model_review_console_url(context),
        },
    )


def gate_deploy_stage(approval: Action, deploy: Action) -> list[Action]:
    """Return the Deploy stage actions with the approval ahead of the deploy.

    Raises
    ------
    ApprovalOrderError
        If ``approval`` is not an approval action or does not run strictly
        before ``deploy``.
    """
    if approval.kind != ActionKind.APPROVAL:
        raise ApprovalOrderError(f"{approval.name} is not an approval action")
    if approval.run_order >= deploy.run_order:
        raise ApprovalOrderError(
            f"Approval {approval.name} (run order {approval.run_order}) must run "
            f"before {deploy.name} (run order {deploy.run_order})"
        )
    return [approval, deploy]
