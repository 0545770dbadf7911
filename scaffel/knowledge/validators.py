# scaffel/knowledge/validators.py
"""
Validation of knowledge entries.

Schema validation runs on raw entries; dependency validation runs on the
sanitized entries and reuses the planning engine's cycle search and depth
computation.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from scaffel.knowledge.schema import NAME_PATTERN, FeatureKnowledge
from scaffel.planning.organizer import dependency_depths
from scaffel.planning.resolver import find_cycles
from scaffel.planning.schemas import Feature

logger = logging.getLogger(__name__)

MAX_CHAIN_DEPTH = 10
MAX_WEEKS_DRIFT = 2

_NAME_RE = re.compile(NAME_PATTERN)


@dataclass
class KnowledgeValidation:
    """Outcome of a validation pass."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    entries: list[FeatureKnowledge] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)


def validate_entry(raw: Any) -> tuple[FeatureKnowledge | None, list[str], list[str]]:
    """Validate one raw entry; returns (entry or None, errors, warnings)."""
    try:
        entry = FeatureKnowledge.model_validate(raw)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in error['loc']) or 'entry'}: {error['msg']}"
            for error in e.errors()
        ]
        return None, errors, []

    errors: list[str] = []
    warnings: list[str] = []

    derived_weeks = math.ceil(entry.estimated_time.days / 5)
    if abs(entry.estimated_time.weeks - derived_weeks) > MAX_WEEKS_DRIFT:
        warnings.append(
            f"Estimated weeks ({entry.estimated_time.weeks}) doesn't match "
            f"calculated weeks from days ({derived_weeks})"
        )

    if entry.name in entry.aliases:
        warnings.append("Aliases array contains the feature name itself")

    for dep in entry.common_dependencies:
        if not _NAME_RE.match(dep):
            errors.append(f"Invalid dependency name format: {dep}")

    return (entry if not errors else None), errors, warnings


def validate_schema_batch(raw_entries: list[Any]) -> KnowledgeValidation:
    """Validate every raw entry and reject duplicate canonical names."""
    errors: list[str] = []
    warnings: list[str] = []
    entries: list[FeatureKnowledge] = []
    names: set[str] = set()

    for index, raw in enumerate(raw_entries):
        entry, entry_errors, entry_warnings = validate_entry(raw)
        if entry_errors:
            errors.append(f"Feature at index {index}: {', '.join(entry_errors)}")
        warnings.extend(f"Feature at index {index}: {w}" for w in entry_warnings)
        if entry is None:
            continue
        if entry.name in names:
            errors.append(f"Duplicate feature name: {entry.name} (at index {index})")
        names.add(entry.name)
        entries.append(entry)

    return KnowledgeValidation(valid=not errors, errors=errors, warnings=warnings, entries=entries)


def sanitize(entry: FeatureKnowledge) -> FeatureKnowledge:
    """Normalize case and whitespace, dropping blank list items."""
    return entry.model_copy(
        update={
            "name": entry.name.strip().lower(),
            "aliases": [a.strip().lower() for a in entry.aliases if a.strip()],
            "description": entry.description.strip(),
            "common_dependencies": [
                d.strip().lower() for d in entry.common_dependencies if d.strip()
            ],
            "checklist_sections": [s.strip() for s in entry.checklist_sections if s.strip()],
        }
    )


def validate_knowledge_dependencies(entries: list[FeatureKnowledge]) -> KnowledgeValidation:
    """
    Check that knowledge dependencies exist, are not self-references and
    form no cycles; warn about very deep dependency chains.
    """
    errors: list[str] = []
    warnings: list[str] = []
    names = {entry.name for entry in entries}

    for entry in entries:
        for dep in entry.common_dependencies:
            if dep not in names:
                errors.append(f'Feature "{entry.name}" depends on non-existent feature "{dep}"')
            if dep == entry.name:
                errors.append(f'Feature "{entry.name}" cannot depend on itself')

    adjacency = {entry.name: list(entry.common_dependencies) for entry in entries}
    cycles = find_cycles(adjacency, list(adjacency))
    if cycles:
        errors.append(
            "Circular dependencies detected: "
            + ", ".join(" -> ".join(cycle) for cycle in cycles)
        )

    as_features = [
        Feature(id=entry.name, name=entry.name, dependencies=entry.common_dependencies)
        for entry in entries
    ]
    for name, depth in dependency_depths(as_features, as_features, acyclic=not cycles).items():
        if depth > MAX_CHAIN_DEPTH:
            warnings.append(f'Feature "{name}" has very deep dependency chain (depth: {depth})')

    return KnowledgeValidation(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        entries=list(entries),
        cycles=cycles,
    )
