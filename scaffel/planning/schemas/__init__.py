# scaffel/planning/schemas/__init__.py
"""Pydantic schemas shared by the planning engine and its collaborators."""

from scaffel.planning.schemas.feature import Feature, Priority, TimeEstimate
from scaffel.planning.schemas.roadmap import (
    DependencyEdge,
    DependencyGraph,
    Phase,
    ProductInput,
    ProductType,
    Roadmap,
    RoadmapMetadata,
    Timeline,
)

__all__ = [
    "Feature",
    "Priority",
    "TimeEstimate",
    "DependencyEdge",
    "DependencyGraph",
    "Phase",
    "ProductInput",
    "ProductType",
    "Roadmap",
    "RoadmapMetadata",
    "Timeline",
]
