# scaffel/checklist/items.py
"""Checklist item type and small builders."""

from dataclasses import dataclass, field


@dataclass
class ChecklistItem:
    text: str
    sub_items: list["ChecklistItem"] = field(default_factory=list)
    stack_specific: bool = False


def items(*texts: str) -> list[ChecklistItem]:
    return [ChecklistItem(text) for text in texts]


def group(title: str, *texts: str) -> ChecklistItem:
    """A titled item whose sub-items are ``texts``."""
    return ChecklistItem(title, items(*texts))
