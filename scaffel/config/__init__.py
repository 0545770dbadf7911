# scaffel/config/__init__.py
"""Configuration system for scaffel."""

from .loader import get_config_path, load_settings, parse_project_file
from .schema import (
    FeatureSection,
    KnowledgeConfig,
    OutputConfig,
    ProductSection,
    ProjectConfig,
    ScaffelSettings,
    TechStackSection,
)

__all__ = [
    "ScaffelSettings",
    "OutputConfig",
    "KnowledgeConfig",
    "ProjectConfig",
    "ProductSection",
    "FeatureSection",
    "TechStackSection",
    "load_settings",
    "get_config_path",
    "parse_project_file",
]
