# scaffel/config/schema.py
"""
Pydantic configuration models for scaffel.

``ScaffelSettings`` holds tool settings (config.yaml in the user config
directory). ``ProjectConfig`` describes one product to plan and is read
from a YAML or JSON project file.

All models use extra="ignore" to allow unknown keys without crashing.
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    model_config = ConfigDict(extra="ignore")

    dir: str = Field(
        default="./roadmap",
        description="Directory for generated roadmap files",
    )
    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )
    json_logs: bool = Field(
        default=False, description="Emit JSON log lines on stderr"
    )
    write_checklists: bool = Field(
        default=True, description="Write one checklist file per feature next to the roadmap"
    )


class KnowledgeConfig(BaseModel):
    """Feature knowledge base configuration."""

    model_config = ConfigDict(extra="ignore")

    path: str | None = Field(
        default=None,
        description="JSON file or directory of feature knowledge (None = bundled data)",
    )
    recursive: bool = Field(
        default=False, description="Search subdirectories when path is a directory"
    )


class ScaffelSettings(BaseModel):
    """Root tool configuration for scaffel."""

    model_config = ConfigDict(extra="ignore")

    output: OutputConfig = Field(default_factory=OutputConfig)
    knowledge: KnowledgeConfig = Field(default_factory=KnowledgeConfig)


class ProductSection(BaseModel):
    """Product block of a project file."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, description="Product name")
    description: str | None = Field(default=None, description="Product summary")
    type: str | None = Field(default=None, description="saas, ecommerce, mobile, api or other")
    domain: str | None = Field(default=None, description="Business domain")


class TechStackSection(BaseModel):
    """Tech stack block of a project file; values are normalized by TechStackParser."""

    model_config = ConfigDict(extra="ignore")

    framework: str | None = None
    backend: str | None = None
    database: str | None = None
    language: str | None = None
    styling: str | None = None


class EstimateSection(BaseModel):
    """Explicit effort override in a project file."""

    model_config = ConfigDict(extra="ignore")

    days: int = Field(..., ge=0)
    weeks: int | None = Field(default=None, ge=0)


class FeatureSection(BaseModel):
    """One feature entry of a project file."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, description="Feature name")
    id: str | None = Field(default=None, description="Explicit id (derived from name if absent)")
    description: str | None = None
    priority: Literal["critical", "high", "medium", "low"] | None = None
    category: str | None = None
    dependencies: list[str] | None = Field(
        default=None, description="Ids of other features in this file"
    )
    estimated_time: EstimateSection | None = Field(
        default=None,
        validation_alias=AliasChoices("estimated_time", "estimatedTime"),
    )


class OptionsSection(BaseModel):
    """Generation options of a project file."""

    model_config = ConfigDict(extra="ignore")

    multi_tenant: bool = Field(
        default=False, validation_alias=AliasChoices("multi_tenant", "multiTenant")
    )
    include_admin: bool = Field(
        default=False, validation_alias=AliasChoices("include_admin", "includeAdmin")
    )
    include_tests: bool = Field(
        default=True, validation_alias=AliasChoices("include_tests", "includeTests")
    )
    include_docs: bool = Field(
        default=True, validation_alias=AliasChoices("include_docs", "includeDocs")
    )


class ProjectConfig(BaseModel):
    """A product to plan, as read from a project file."""

    model_config = ConfigDict(extra="ignore")

    product: ProductSection
    tech_stack: TechStackSection = Field(
        default_factory=TechStackSection,
        validation_alias=AliasChoices("tech_stack", "techStack"),
    )
    features: list[FeatureSection] = Field(default_factory=list)
    options: OptionsSection = Field(default_factory=OptionsSection)
