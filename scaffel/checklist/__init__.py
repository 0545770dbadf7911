# scaffel/checklist/__init__.py
"""Per-feature implementation checklists."""

from scaffel.checklist.generator import (
    ChecklistGenerator,
    ChecklistItem,
    FeatureChecklist,
    render_checklist_markdown,
)

__all__ = [
    "ChecklistGenerator",
    "ChecklistItem",
    "FeatureChecklist",
    "render_checklist_markdown",
]
