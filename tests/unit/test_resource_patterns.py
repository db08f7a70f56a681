"""Tests for resource-pattern templates — one test per template."""

from __future__ import annotations

import pytest

from pipeforge.core import resource_patterns as patterns
from pipeforge.core.errors import ConfigurationError
from pipeforge.models.config import DeploymentContext


class TestStoragePatterns:
    def test_bucket_arn(self, context: DeploymentContext):
        assert patterns.bucket_arn("artifacts", context) == "arn:aws:s3:::artifacts"

    def test_bucket_arn_passes_through_arns(self, context: DeploymentContext):
        arn = "arn:aws:s3:::already-an-arn"
        assert patterns.bucket_arn(arn, context) == arn

    def test_bucket_objects_arn(self, context: DeploymentContext):
        assert patterns.bucket_objects_arn("artifacts", context) == "arn:aws:s3:::artifacts/*"

    def test_partition_is_honoured(self):
        ctx = DeploymentContext(account="1", region="cn-north-1", partition="aws-cn")
        assert patterns.bucket_arn("artifacts", ctx) == "arn:aws-cn:s3:::artifacts"

    def test_toolkit_staging_bucket(self, context: DeploymentContext):
        assert (
            patterns.toolkit_staging_bucket_arn(context)
            == "arn:aws:s3:::cdktoolkit-stagingbucket-*"
        )


class TestModelPipelinePatterns:
    def test_pipeline_arn(self, context: DeploymentContext):
        assert (
            patterns.model_pipeline_arn("demo", context)
            == "arn:aws:sagemaker:eu-west-1:123456789012:pipeline/demo"
        )

    def test_pipeline_children_arn(self, context: DeploymentContext):
        assert (
            patterns.model_pipeline_children_arn("demo", context)
            == "arn:aws:sagemaker:eu-west-1:123456789012:pipeline/demo/*"
        )

    def test_pseudo_parameter_context(self):
        arn = patterns.model_pipeline_arn("demo", DeploymentContext())
        assert arn == "arn:aws:sagemaker:${AWS::Region}:${AWS::AccountId}:pipeline/demo"


class TestDeploymentPatterns:
    def test_stack_name(self):
        assert patterns.deployment_stack_name("demo") == "Deployment-demo"

    def test_function_arn(self, context: DeploymentContext):
        assert (
            patterns.deployment_function_arn("demo", context)
            == "arn:aws:lambda:eu-west-1:123456789012:function:Deployment-demo*"
        )

    def test_role_arn(self, context: DeploymentContext):
        assert (
            patterns.deployment_role_arn("demo", context)
            == "arn:aws:iam::123456789012:role/Deployment-demo-*"
        )

    def test_stack_arn(self, context: DeploymentContext):
        assert (
            patterns.deployment_stack_arn("demo", context)
            == "arn:aws:cloudformation:eu-west-1:123456789012:stack/Deployment-demo/*"
        )

    def test_toolkit_stack_arn(self, context: DeploymentContext):
        assert (
            patterns.toolkit_stack_arn(context)
            == "arn:aws:cloudformation:eu-west-1:123456789012:stack/CDKToolkit/*"
        )

    def test_console_url(self, context: DeploymentContext):
        assert patterns.model_review_console_url(context) == (
            "https://eu-west-1.console.aws.amazon.com/sagemaker/home"
            "?region=eu-west-1#/studio/"
        )


class TestProjectScoping:
    @pytest.mark.parametrize(
        "template",
        [
            patterns.model_pipeline_arn,
            patterns.model_pipeline_children_arn,
            patterns.deployment_function_arn,
            patterns.deployment_role_arn,
            patterns.deployment_stack_arn,
        ],
    )
    @pytest.mark.parametrize("project", ["", "   ", "*", "demo*", "de?mo"])
    def test_unscoped_project_names_refused(
        self, template, project: str, context: DeploymentContext
    ):
        with pytest.raises(ConfigurationError):
            template(project, context)


class TestReferenceScoping:
    @pytest.mark.parametrize("bucket", ["*", "art*", "arti?acts", "arn:aws:s3:::*", ""])
    def test_wildcard_buckets_refused(self, bucket: str, context: DeploymentContext):
        with pytest.raises(ConfigurationError):
            patterns.bucket_arn(bucket, context)
        with pytest.raises(ConfigurationError):
            patterns.bucket_objects_arn(bucket, context)

    def test_execution_role_passes_through(self):
        role = "arn:aws:iam::123456789012:role/exec-role"
        assert patterns.execution_role_ref(role) == role

    @pytest.mark.parametrize("role", ["*", "arn:aws:iam::123456789012:role/*", " "])
    def test_wildcard_execution_role_refused(self, role: str):
        with pytest.raises(ConfigurationError, match="(?i)execution role"):
            patterns.execution_role_ref(role)
