# scaffel/knowledge/__init__.py
"""Feature knowledge base: reference data used to enrich user features."""

from scaffel.knowledge.base import FeatureKnowledgeBase
from scaffel.knowledge.provider import BUNDLED_DATA_PATH, JsonProvider, KnowledgeProvider
from scaffel.knowledge.schema import FeatureKnowledge
from scaffel.knowledge.validators import (
    KnowledgeValidation,
    sanitize,
    validate_knowledge_dependencies,
    validate_schema_batch,
)

__all__ = [
    "BUNDLED_DATA_PATH",
    "FeatureKnowledge",
    "FeatureKnowledgeBase",
    "JsonProvider",
    "KnowledgeProvider",
    "KnowledgeValidation",
    "sanitize",
    "validate_knowledge_dependencies",
    "validate_schema_batch",
]
