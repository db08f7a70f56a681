"""Execution identity and policy statement models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pipeforge.models.mappings import ConditionMap

POLICY_VERSION = "2012-10-17"


class Effect(str, Enum):
    ALLOW = "Allow"
    DENY = "Deny"


class PolicyStatement(BaseModel):
    """One permission grant: effect x actions x resources, optionally conditioned.

    ``conditions`` maps a condition operator to ``{key: values}``, e.g.
    ``{"ForAnyValue:StringEquals": {"aws:CalledVia": ("cloudformation.amazonaws.com",)}}``.
    """

    model_config = ConfigDict(frozen=True)

    effect: Effect = Effect.ALLOW
    actions: tuple[str, ...]
    resources: tuple[str, ...]
    conditions: ConditionMap = Field(default_factory=dict, validate_default=True)

    def to_json(self) -> dict[str, Any]:
        """Render the statement in IAM policy-document shape."""
        statement: dict[str, Any] = {
            "Effect": self.effect.value,
            "Action": list(self.actions),
            "Resource": list(self.resources),
        }
        if self.conditions:
            statement["Condition"] = {
                operator: {key: list(values) for key, values in matches.items()}
                for operator, matches in self.conditions.items()
            }
        return statement


class ExecutionIdentity(BaseModel):
    """A named principal assumed by a stage's executor."""

    model_config = ConfigDict(frozen=True)

    name: str
    assumed_by: str = "codebuild.amazonaws.com"
    statements: tuple[PolicyStatement, ...] = ()

    @property
    def resources(self) -> tuple[str, ...]:
        """Every resource pattern granted, in statement order."""
        return tuple(r for s in self.statements for r in s.resources)

    def policy_document(self) -> dict[str, Any]:
        """Return the identity's inline policy as an IAM policy document."""
        return {
            "Version": POLICY_VERSION,
            "Statement": [s.to_json() for s in self.statements],
        }

    def trust_policy_document(self) -> dict[str, Any]:
        """Return the assume-role policy for the identity's service principal."""
        return {
            "Version": POLICY_VERSION,
            "Statement": [
                {
                    "Effect": Effect.ALLOW.value,
                    "Principal": {"Service": self.assumed_by},
                    "Action": "sts:AssumeRole",
                }
            ],
        }
