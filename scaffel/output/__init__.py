# scaffel/output/__init__.py
"""Markdown rendering of generated roadmaps."""

from scaffel.output.roadmap import RoadmapRenderer, phase_week_ranges

__all__ = ["RoadmapRenderer", "phase_week_ranges"]
