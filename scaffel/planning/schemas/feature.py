# scaffel/planning/schemas/feature.py
"""Schemas for features and effort estimates."""

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Priority = Literal["critical", "high", "medium", "low"]


class TimeEstimate(BaseModel):
    """Effort estimate in working days, with weeks of five days."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    days: int = Field(
        ...,
        ge=0,
        description="Estimated effort in working days",
    )

    weeks: int = Field(
        default=0,
        ge=0,
        description="Estimated effort in weeks (ceil(days / 5) when derived)",
    )

    @classmethod
    def from_days(cls, days: int) -> "TimeEstimate":
        """Build an estimate whose weeks are derived from days."""
        return cls(days=days, weeks=math.ceil(days / 5))


class Feature(BaseModel):
    """
    A unit of buildable product functionality.

    Constructed once from parsed input, optionally enriched from the
    knowledge base (which returns a new instance), then read-only.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(
        ...,
        description="Stable unique identifier within a batch",
    )

    name: str = Field(
        ...,
        description="Display name",
    )

    description: str | None = Field(
        default=None,
        description="What the feature does",
    )

    priority: Priority | None = Field(
        default=None,
        description="Delivery priority: critical, high, medium, low",
    )

    dependencies: list[str] | None = Field(
        default=None,
        description="Ids of features in the same batch that must be done first",
    )

    estimated_time: TimeEstimate | None = Field(
        default=None,
        alias="estimatedTime",
        description="Explicit effort override",
    )

    category: str | None = Field(
        default=None,
        description="Category tag (foundation, core, enhancement, ...)",
    )

    checklist_sections: list[str] | None = Field(
        default=None,
        alias="checklistSections",
        description="Implementation sections supplied by the knowledge base",
    )

    @property
    def depends_on(self) -> list[str]:
        """Declared dependencies, empty when absent."""
        return list(self.dependencies or [])
