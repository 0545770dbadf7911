# scaffel/parsers/__init__.py
"""Parsers turning CLI and project-file input into planning records."""

from scaffel.parsers.features import FeatureParser, feature_id_from_name
from scaffel.parsers.product import ProductParser
from scaffel.parsers.tech_stack import TechStack, TechStackParser

__all__ = [
    "FeatureParser",
    "ProductParser",
    "TechStack",
    "TechStackParser",
    "feature_id_from_name",
]
