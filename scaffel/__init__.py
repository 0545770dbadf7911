# scaffel/__init__.py
"""scaffel: technical roadmaps and implementation checklists from feature lists."""

__version__ = "0.1.0"
GENERATOR_NAME = "scaffel"
