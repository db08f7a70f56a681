"""Permission synthesizer — least-privilege identities for privileged stages.

``synthesize`` is a pure function of the stage kind, the pipeline config and
the deployment context.  Project-scoped resources always come from the
templates in :mod:`pipeforge.core.resource_patterns`.

Two stages get a dedicated identity:

- **ModelPipeline** may touch the artifact bucket, manage the project's own
  model pipeline, and pass exactly the configured execution role.
- **Deploy** may manage the project's deployment functions, roles and
  endpoints only when called through CloudFormation, plus drive its own
  stack and the toolkit staging bucket.
"""

from __future__ import annotations

import logging

from pipeforge.core import resource_patterns as patterns
from pipeforge.core.errors import UnsupportedStageKindError
from pipeforge.models.config import DeploymentContext, PipelineConfig
from pipeforge.models.policies import ExecutionIdentity, PolicyStatement
from pipeforge.models.stages import StageKind

logger = logging.getLogger(__name__)

MODEL_PIPELINE_ROLE = "ModelPipelineRole"
DEPLOY_ROLE = "DeployRole"

CALLED_VIA_CLOUDFORMATION: dict[str, dict[str, tuple[str, ...]]] = {
    "ForAnyValue:StringEquals": {
        "aws:CalledVia": ("cloudformation.amazonaws.com",),
    },
}

ARTIFACT_BUCKET_ACTIONS = (
    "s3:CreateBucket",
    "s3:GetObject",
    "s3:PutObject",
    "s3:ListBucket",
)

MODEL_PIPELINE_ACTIONS = (
    "sagemaker:CreatePipeline",
    "sagemaker:ListTags",
    "sagemaker:AddTags",
    "sagemaker:UpdatePipeline",
    "sagemaker:DescribePipeline",
    "sagemaker:StartPipelineExecution",
    "sagemaker:DescribePipelineExecution",
    "sagemaker:ListPipelineExecutionSteps",
)

STACK_ACTIONS = (
    "cloudformation:DescribeStacks",
    "cloudformation:CreateChangeSet",
    "cloudformation:DescribeChangeSet",
    "cloudformation:ExecuteChangeSet",
    "cloudformation:DescribeStackEvents",
    "cloudformation:DeleteChangeSet",
    "cloudformation:GetTemplate",
)

STAGING_BUCKET_ACTIONS = (
    "s3:*Object",
    "s3:ListBucket",
    "s3:GetBucketLocation",
)


def synthesize(
    stage_kind: StageKind,
    config: PipelineConfig,
    context: DeploymentContext,
) -> ExecutionIdentity:
    """Derive the execution identity for a privileged stage.

    Raises
    ------
    UnsupportedStageKindError
        If the stage runs under the provisioner's default identity.
    """
    if stage_kind == StageKind.MODEL_PIPELINE:
        identity = _model_pipeline_identity(config, context)
    elif stage_kind == StageKind.DEPLOY:
        identity = _deploy_identity(config, context)
    else:
        raise UnsupportedStageKindError(
            f"Stage {stage_kind.value} has no dedicated execution identity"
        )

    logger.info(
        "Synthesized %s for %s: %d statements",
        identity.name,
        config.project_name,
        len(identity.statements),
    )
    return identity


def _model_pipeline_identity(
    config: PipelineConfig, context: DeploymentContext
) -> ExecutionIdentity:
    project = config.project_name
    return ExecutionIdentity(
        name=MODEL_PIPELINE_ROLE,
        statements=(
            PolicyStatement(
                actions=ARTIFACT_BUCKET_ACTIONS,
                resources=(
                    patterns.bucket_arn(config.artifact_bucket, context),
                    patterns.bucket_objects_arn(config.artifact_bucket, context),
                ),
            ),
            PolicyStatement(
                actions=MODEL_PIPELINE_ACTIONS,
                resources=(
                    patterns.model_pipeline_arn(project, context),
                    patterns.model_pipeline_children_arn(project, context),
                ),
            ),
            PolicyStatement(
                actions=("iam:PassRole",),
                resources=(patterns.execution_role_ref(config.execution_role),),
            ),
        ),
    )


def _deploy_identity(
    config: PipelineConfig, context: DeploymentContext
) -> ExecutionIdentity:
    project = config.project_name
    return ExecutionIdentity(
        name=DEPLOY_ROLE,
        statements=(
            PolicyStatement(
                actions=("lambda:*Function*",),
                resources=(patterns.deployment_function_arn(project, context),),
                conditions=CALLED_VIA_CLOUDFORMATION,
            ),
            # Endpoint names are chosen by the deployment stack, so this grant
            # stays account-wide; CalledVia still confines it to CloudFormation.
            PolicyStatement(
                actions=("sagemaker:*Endpoint*",),
                resources=("*",),
                conditions=CALLED_VIA_CLOUDFORMATION,
            ),
            PolicyStatement(
                actions=("iam:*Role", "iam:*Policy*", "iam:*RolePolicy"),
                resources=(patterns.deployment_role_arn(project, context),),
                conditions=CALLED_VIA_CLOUDFORMATION,
            ),
            PolicyStatement(
                actions=STACK_ACTIONS,
                resources=(
                    patterns.toolkit_stack_arn(context),
                    patterns.deployment_stack_arn(project, context),
                ),
            ),
            PolicyStatement(
                actions=STAGING_BUCKET_ACTIONS,
                resources=(patterns.toolkit_staging_bucket_arn(context),),
            ),
        ),
    )
