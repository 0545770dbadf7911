# scaffel/parsers/features.py
"""
Feature list parsing and validation.

Accepts plain names, dicts, project-file sections or Feature instances.
"""

import logging
import re
from typing import Any

from scaffel.config.schema import FeatureSection
from scaffel.planning.schemas import Feature, TimeEstimate

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def feature_id_from_name(name: str, index: int) -> str:
    """Lower-case the name and join words with hyphens; ``feature-<index>`` if blank."""
    slug = _WHITESPACE.sub("-", name.strip().lower())
    return slug or f"feature-{index}"


class FeatureParser:
    """Turns user input into Feature records."""

    def parse(self, items: list[Any]) -> list[Feature]:
        """
        Parse a heterogeneous list into features.

        Names produce features without dependencies or priority, so the
        knowledge base can fill them in later.
        """
        features: list[Feature] = []
        for index, item in enumerate(items):
            if isinstance(item, Feature):
                features.append(item)
            elif isinstance(item, FeatureSection):
                features.append(self._from_section(item, index))
            elif isinstance(item, dict):
                features.append(self._from_section(FeatureSection.model_validate(item), index))
            else:
                name = str(item).strip()
                features.append(Feature(id=feature_id_from_name(name, index), name=name))
        logger.debug(f"Parsed {len(features)} features")
        return features

    def parse_from_string(self, text: str) -> list[Feature]:
        names = [part.strip() for part in text.split(",")]
        return self.parse([name for name in names if name])

    def _from_section(self, section: FeatureSection, index: int) -> Feature:
        estimate = None
        if section.estimated_time is not None:
            days = section.estimated_time.days
            weeks = section.estimated_time.weeks
            estimate = TimeEstimate.from_days(days) if not weeks else TimeEstimate(days=days, weeks=weeks)

        return Feature(
            id=section.id or feature_id_from_name(section.name, index),
            name=section.name.strip(),
            description=section.description,
            priority=section.priority,
            category=section.category,
            dependencies=section.dependencies,
            estimated_time=estimate,
        )

    def validate(self, features: list[Feature]) -> tuple[bool, list[str]]:
        """Check ids are present and unique and every feature has a name."""
        errors: list[str] = []
        seen: set[str] = set()

        for feature in features:
            if not feature.id.strip():
                errors.append(f'Feature "{feature.name}" has no ID')
            if feature.id in seen:
                errors.append(f"Duplicate feature ID: {feature.id}")
            seen.add(feature.id)
            if not feature.name.strip():
                errors.append(f'Feature with ID "{feature.id}" has no name')

        return not errors, errors
