# scaffel/planning/schemas/roadmap.py
"""Schemas for the dependency graph, phases and the final roadmap."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from scaffel.planning.schemas.feature import Feature, TimeEstimate

ProductType = Literal["saas", "ecommerce", "mobile", "api", "other"]


class ProductInput(BaseModel):
    """Descriptor of the product a roadmap is generated for."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Product summary")
    type: ProductType = Field(default="saas", description="Product type")
    domain: str | None = Field(default=None, description="Business domain")


class DependencyEdge(BaseModel):
    """Directed edge: ``to_id`` cannot start before ``from_id`` completes."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    from_id: str = Field(..., description="Dependency id")
    to_id: str = Field(..., description="Dependent id")


class DependencyGraph(BaseModel):
    """
    Derived dependency graph of a feature batch.

    When ``cycles`` is non-empty the graph must not be used for phase
    planning and ``critical_path`` omits the cyclic nodes.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    nodes: tuple[Feature, ...] = Field(
        default=(),
        description="Features of the batch, in input order",
    )

    edges: tuple[DependencyEdge, ...] = Field(
        default=(),
        description="Validated dependency -> dependent edges",
    )

    cycles: tuple[tuple[str, ...], ...] = Field(
        default=(),
        description="Closed loops of ids, first id repeated at the end",
    )

    critical_path: tuple[str, ...] = Field(
        default=(),
        description="Topological execution order of all acyclic nodes",
    )


class Phase(BaseModel):
    """An ordered delivery wave of features."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int = Field(
        ...,
        ge=1,
        description="Phase number (1-indexed, contiguous)",
    )

    name: str = Field(
        ...,
        description="Human-readable phase name",
    )

    goal: str = Field(
        ...,
        description="What this phase achieves",
    )

    features: tuple[Feature, ...] = Field(
        default=(),
        description="Features delivered in this phase",
    )

    estimated_time: TimeEstimate | None = Field(
        default=None,
        description="Derived duration estimate for the phase",
    )


class Timeline(BaseModel):
    """Timeline totals for a roadmap."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    total: TimeEstimate = Field(..., description="Sum of phase estimates")


class RoadmapMetadata(BaseModel):
    """Generation metadata."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    generated_at: datetime = Field(..., description="UTC generation timestamp")
    version: str = Field(..., description="Generator version")
    generator: str = Field(..., description="Generator name")


class Roadmap(BaseModel):
    """
    Output of roadmap generation.

    Immutable once constructed. Renderers rely on every phase having a
    number and an estimate, and on the timeline total being present.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    product: ProductInput
    phases: tuple[Phase, ...] = Field(default=())
    dependency_graph: DependencyGraph | None = Field(default=None)
    timeline: Timeline
    metadata: RoadmapMetadata

    @property
    def feature_count(self) -> int:
        return sum(len(phase.features) for phase in self.phases)
