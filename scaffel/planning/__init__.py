# scaffel/planning/__init__.py
"""Dependency resolution, phase organization and effort estimation."""

from scaffel.planning.estimator import EstimationFactors, TimelineEstimator
from scaffel.planning.generator import RoadmapGenerator
from scaffel.planning.organizer import PhaseOrganizer
from scaffel.planning.resolver import DependencyResolver, DependencyValidation

__all__ = [
    "DependencyResolver",
    "DependencyValidation",
    "EstimationFactors",
    "PhaseOrganizer",
    "RoadmapGenerator",
    "TimelineEstimator",
]
