# scaffel/knowledge/base.py
"""
Feature knowledge base.

Indexes knowledge entries by canonical name and aliases and uses them to
fill in missing feature details before planning. Enrichment never
overwrites values the user supplied.
"""

import logging

from scaffel.errors import KnowledgeBaseError, ValidationError
from scaffel.knowledge.provider import JsonProvider, KnowledgeProvider
from scaffel.knowledge.schema import FeatureKnowledge
from scaffel.knowledge.validators import (
    sanitize,
    validate_knowledge_dependencies,
    validate_schema_batch,
)
from scaffel.planning.schemas import Feature, TimeEstimate

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "core"
DEFAULT_CHECKLIST_SECTIONS = ["Prerequisites", "Implementation", "Testing"]


class FeatureKnowledgeBase:
    """
    Read-only lookup of feature knowledge.

    Loads lazily from its provider on first use. Lookups are
    case-insensitive and accept aliases.
    """

    def __init__(self, provider: KnowledgeProvider | None = None) -> None:
        self.provider = provider or JsonProvider()
        self._index: dict[str, FeatureKnowledge] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def initialize(self) -> None:
        """
        Load, validate, sanitize and index knowledge entries.

        Raises:
            KnowledgeBaseError: If the provider is unavailable or fails
            ValidationError: If entries fail schema or dependency validation
        """
        if self._loaded:
            return

        if not self.provider.is_available():
            raise KnowledgeBaseError(f"Knowledge provider is not available: {self.provider.name}")

        raw_entries = self.provider.load()

        schema_result = validate_schema_batch(raw_entries)
        if not schema_result.valid:
            raise ValidationError(
                "Schema validation failed for knowledge base features", schema_result.errors
            )
        if schema_result.warnings:
            logger.warning(f"Schema validation warnings: {schema_result.warnings}")

        entries = [sanitize(entry) for entry in schema_result.entries]

        dependency_result = validate_knowledge_dependencies(entries)
        if not dependency_result.valid:
            raise ValidationError(
                "Dependency validation failed for knowledge base features",
                dependency_result.errors,
            )
        if dependency_result.warnings:
            logger.warning(f"Dependency validation warnings: {dependency_result.warnings}")

        self._index_entries(entries)
        self._loaded = True
        logger.info(f"Loaded {len(entries)} knowledge entries from {self.provider.name}")

    def reload(self) -> None:
        self._loaded = False
        self.initialize()

    def _index_entries(self, entries: list[FeatureKnowledge]) -> None:
        self._index.clear()
        for entry in entries:
            self._index[entry.name.lower()] = entry
            for alias in entry.aliases:
                self._index[alias.lower()] = entry

    def lookup(self, name: str) -> FeatureKnowledge | None:
        """Find knowledge by canonical name or alias, or None."""
        self.initialize()
        return self._index.get(name.strip().lower())

    def all_features(self) -> list[FeatureKnowledge]:
        """All entries, deduplicated by canonical name, in load order."""
        self.initialize()
        seen: dict[str, FeatureKnowledge] = {}
        for entry in self._index.values():
            seen.setdefault(entry.name, entry)
        return list(seen.values())

    def enrich_feature(self, feature: Feature) -> Feature:
        """
        Return a copy of ``feature`` with missing details filled in.

        Explicit values always win. Unknown features get a generic
        description, medium priority and the "core" category; their effort
        stays unset so the estimator's heuristics apply.
        """
        knowledge = self.lookup(feature.name)

        if feature.priority is not None:
            priority = feature.priority
        elif knowledge is not None and knowledge.category == "foundation":
            priority = "critical"
        else:
            priority = "medium"

        estimated_time = feature.estimated_time
        if estimated_time is None and knowledge is not None:
            estimated_time = TimeEstimate(
                days=knowledge.estimated_time.days, weeks=knowledge.estimated_time.weeks
            )

        return feature.model_copy(
            update={
                "description": feature.description
                or (knowledge.description if knowledge else f"Implementation of {feature.name} feature."),
                "priority": priority,
                "dependencies": (
                    feature.dependencies
                    if feature.dependencies is not None
                    else list(knowledge.common_dependencies) if knowledge else []
                ),
                "estimated_time": estimated_time,
                "category": feature.category or (knowledge.category if knowledge else DEFAULT_CATEGORY),
                "checklist_sections": feature.checklist_sections
                or (list(knowledge.checklist_sections) if knowledge else list(DEFAULT_CHECKLIST_SECTIONS)),
            }
        )

    def enrich_features(self, features: list[Feature]) -> list[Feature]:
        """
        Enrich a batch, keeping dependencies inside the batch.

        Dependencies taken from knowledge are canonical names; they are
        mapped to the id of the batch feature with that knowledge entry and
        dropped when the batch has no such feature. Explicit dependencies
        are kept untouched.
        """
        id_by_canonical: dict[str, str] = {}
        for feature in features:
            knowledge = self.lookup(feature.name)
            if knowledge is not None:
                id_by_canonical.setdefault(knowledge.name, feature.id)

        enriched: list[Feature] = []
        for feature in features:
            result = self.enrich_feature(feature)
            if feature.dependencies is None:
                mapped = [
                    id_by_canonical[dep]
                    for dep in result.depends_on
                    if dep in id_by_canonical and id_by_canonical[dep] != feature.id
                ]
                dropped = [dep for dep in result.depends_on if dep not in id_by_canonical]
                if dropped:
                    logger.debug(
                        f"Dropped knowledge dependencies of '{feature.id}' not in batch: {dropped}"
                    )
                result = result.model_copy(update={"dependencies": mapped})
            enriched.append(result)

        logger.info(f"Enriched {len(enriched)} features from knowledge base")
        return enriched
