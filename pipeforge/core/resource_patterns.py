"""Resource-pattern templates for synthesized policy statements.

Every project-scoped pattern is built by interpolating the project name (and
the deployment context where the service needs it) into a fixed template.
A project name, bucket or role reference that carries a wildcard character
is refused, so no template can ever widen into a cross-project grant.
"""

from __future__ import annotations

from pipeforge.core.errors import ConfigurationError
from pipeforge.models.config import RESOURCE_WILDCARDS, DeploymentContext

TOOLKIT_STACK_NAME = "CDKToolkit"
TOOLKIT_STAGING_BUCKET_PREFIX = "cdktoolkit-stagingbucket-"
DEPLOYMENT_PREFIX = "Deployment-"


def _exact(reference: str, what: str) -> str:
    if not reference or not reference.strip():
        raise ConfigurationError(f"Resource patterns need a non-empty {what}")
    if RESOURCE_WILDCARDS & set(reference):
        raise ConfigurationError(
            f"{what.capitalize()} {reference!r} contains a wildcard character"
        )
    return reference


def _scoped(project_name: str) -> str:
    return _exact(project_name, "project name")


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


def bucket_arn(bucket: str, context: DeploymentContext) -> str:
    """ARN of a bucket; a bucket reference that is already an ARN passes through."""
    bucket = _exact(bucket, "bucket reference")
    if bucket.startswith("arn:"):
        return bucket
    return f"arn:{context.partition}:s3:::{bucket}"


def bucket_objects_arn(bucket: str, context: DeploymentContext) -> str:
    return f"{bucket_arn(bucket, context)}/*"


def toolkit_staging_bucket_arn(context: DeploymentContext) -> str:
    return f"arn:{context.partition}:s3:::{TOOLKIT_STAGING_BUCKET_PREFIX}*"


# ---------------------------------------------------------------------------
# Model pipeline
# ---------------------------------------------------------------------------


def model_pipeline_arn(project_name: str, context: DeploymentContext) -> str:
    return (
        f"arn:{context.partition}:sagemaker:{context.region}:{context.account}"
        f":pipeline/{_scoped(project_name)}"
    )


def execution_role_ref(role: str) -> str:
    """The execution role handed to the model pipeline, passed through exactly."""
    return _exact(role, "execution role")


def model_pipeline_children_arn(project_name: str, context: DeploymentContext) -> str:
    return f"{model_pipeline_arn(project_name, context)}/*"


# ---------------------------------------------------------------------------
# Deployment
# ---------------------------------------------------------------------------


def deployment_stack_name(project_name: str) -> str:
    return f"{DEPLOYMENT_PREFIX}{_scoped(project_name)}"


def deployment_function_arn(project_name: str, context: DeploymentContext) -> str:
    return (
        f"arn:{context.partition}:lambda:{context.region}:{context.account}"
        f":function:{deployment_stack_name(project_name)}*"
    )


def deployment_role_arn(project_name: str, context: DeploymentContext) -> str:
    return (
        f"arn:{context.partition}:iam::{context.account}"
        f":role/{deployment_stack_name(project_name)}-*"
    )


def deployment_stack_arn(project_name: str, context: DeploymentContext) -> str:
    return (
        f"arn:{context.partition}:cloudformation:{context.region}:{context.account}"
        f":stack/{deployment_stack_name(project_name)}/*"
    )


def toolkit_stack_arn(context: DeploymentContext) -> str:
    return (
        f"arn:{context.partition}:cloudformation:{context.region}:{context.account}"
        f":stack/{TOOLKIT_STACK_NAME}/*"
    )


# ---------------------------------------------------------------------------
# Console links
# ---------------------------------------------------------------------------


def model_review_console_url(context: DeploymentContext) -> str:
    """Deep link to the model-review console in the deployment region."""
    return (
        f"https://{context.region}.console.aws.amazon.com/sagemaker/home"
        f"?region={context.region}#/studio/"
    )
