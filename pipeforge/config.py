"""Runtime settings — env-driven, read by the CLI.

Centralized settings using pydantic-settings.  Reads from a .env file and
PIPEFORGE_* environment variables.  Pipeline *descriptions* live in project
config files (see :mod:`pipeforge.core.config_loader`); these settings only
describe where and how the tool runs.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from pipeforge.models.config import DeploymentContext


class ProdConfig(BaseSettings):
    """Runtime configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PIPEFORGE_ACCOUNT=123456789012
        export PIPEFORGE_REGION=eu-west-1
        export PIPEFORGE_LOG_LEVEL=DEBUG

    Or via .env file::

        PIPEFORGE_OUTPUT_DIR=cdk.out
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PIPEFORGE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"

    # Deployment context; pseudo-parameters resolve at deploy time
    account: str = "${AWS::AccountId}"
    region: str = "${AWS::Region}"
    partition: str = "aws"

    # Where synthesized manifests are written
    output_dir: Path = Path(".pipeforge/out")

    def deployment_context(self) -> DeploymentContext:
        return DeploymentContext(
            account=self.account, region=self.region, partition=self.partition
        )
