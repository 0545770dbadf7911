# scaffel/knowledge/schema.py
"""Schema for feature knowledge entries."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from scaffel.planning.schemas import TimeEstimate

KnowledgeCategory = Literal["foundation", "core", "advanced", "integration", "optimization"]

NAME_PATTERN = r"^[a-z0-9-]+$"


class KnowledgeEstimate(TimeEstimate):
    """Knowledge estimates are capped to a year."""

    days: int = Field(..., ge=0, le=365)
    weeks: int = Field(..., ge=0, le=52)


class FeatureKnowledge(BaseModel):
    """Reference data about a commonly requested feature."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        pattern=NAME_PATTERN,
        description="Canonical name: lowercase letters, digits and hyphens",
    )

    aliases: list[str] = Field(
        default_factory=list,
        max_length=20,
        description="Alternative names the feature is looked up by",
    )

    description: str = Field(
        ...,
        min_length=10,
        max_length=1000,
    )

    category: KnowledgeCategory

    common_dependencies: list[str] = Field(
        default_factory=list,
        max_length=20,
        validation_alias=AliasChoices("common_dependencies", "commonDependencies"),
        description="Canonical names of features this one usually builds on",
    )

    estimated_time: KnowledgeEstimate = Field(
        ...,
        validation_alias=AliasChoices("estimated_time", "estimatedTime"),
    )

    checklist_sections: list[str] = Field(
        ...,
        min_length=1,
        max_length=30,
        validation_alias=AliasChoices("checklist_sections", "checklistSections"),
    )
