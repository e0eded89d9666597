"""
Query intent domain models.

A QueryIntent is derived from the raw text of one inbound message and
decides which integration tools are exposed and how the system prompt
is worded. It is never persisted.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ExternalApp(str, Enum):
    """Third-party integrations reachable through external tools."""

    GMAIL = "GMAIL"
    GITHUB = "GITHUB"
    SLACK = "SLACK"
    NOTION = "NOTION"
    CLICKUP = "CLICKUP"
    LINEAR = "LINEAR"


class QueryMode(str, Enum):
    """Coarse label used to pick prompt wording."""

    INTERNAL = "internal"
    EXTERNAL = "external"
    HYBRID = "hybrid"


class QueryIntent(BaseModel):
    """Classified purpose of a single user message."""

    model_config = ConfigDict(frozen=True)

    mode: QueryMode = Field(
        default=QueryMode.INTERNAL,
        description="Workspace-only, integration-only or mixed request",
    )
    requires_external_tools: bool = Field(
        default=False, description="Whether any integration tool may be exposed"
    )
    requested_external_apps: List[ExternalApp] = Field(
        default_factory=list,
        description="Integrations referenced by the query, in first-seen order",
    )

    @model_validator(mode="after")
    def check_consistency(self) -> "QueryIntent":
        """External tools are required exactly when an app was requested."""
        if self.requires_external_tools != bool(self.requested_external_apps):
            raise ValueError(
                "requires_external_tools must match requested_external_apps"
            )
        if len(set(self.requested_external_apps)) != len(
            self.requested_external_apps
        ):
            raise ValueError("requested_external_apps must not contain duplicates")
        return self
