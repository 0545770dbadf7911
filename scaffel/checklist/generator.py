# scaffel/checklist/generator.py
"""
Implementation checklist generation.

Builds a per-feature checklist (prerequisites, implementation, testing,
deployment) from the feature's category, name keywords and the knowledge
base's checklist sections. Database schema, API endpoint and component
sections follow the tech stack when one is given.
"""

import logging
from dataclasses import dataclass, field

from scaffel.checklist.items import ChecklistItem
from scaffel.checklist.items import items as _items
from scaffel.checklist.sections import (
    api_endpoint_tasks,
    component_tasks,
    database_schema_tasks,
    stack_prerequisites,
    stack_testing_tasks,
)
from scaffel.knowledge import FeatureKnowledgeBase
from scaffel.parsers.tech_stack import TechStack
from scaffel.planning.estimator import TimelineEstimator
from scaffel.planning.schemas import Feature, TimeEstimate

logger = logging.getLogger(__name__)


@dataclass
class FeatureChecklist:
    """Checklist for one enriched feature."""

    feature: Feature
    estimate: TimeEstimate
    prerequisites: list[ChecklistItem]
    implementation_tasks: list[ChecklistItem]
    testing_tasks: list[ChecklistItem]
    deployment_tasks: list[ChecklistItem]
    database_schema: list[ChecklistItem] = field(default_factory=list)
    api_endpoints: list[ChecklistItem] = field(default_factory=list)
    components: list[ChecklistItem] = field(default_factory=list)
    tech_stack: TechStack | None = None


# (keywords matched against the section title, tasks)
_SECTION_TASKS: list[tuple[tuple[str, ...], tuple[str, ...]]] = [
    (
        ("API", "Endpoint"),
        (
            "Design API contract",
            "Implement endpoint handlers",
            "Add request validation",
            "Add response formatting",
            "Add error handling",
        ),
    ),
    (
        ("Database", "Schema"),
        (
            "Design table structure",
            "Create migration files",
            "Add indexes",
            "Add constraints",
            "Add relationships",
        ),
    ),
    (
        ("Component", "UI"),
        (
            "Design component structure",
            "Implement components",
            "Add styling",
            "Add interactivity",
            "Add error states",
        ),
    ),
    (
        ("Security",),
        (
            "Add input validation",
            "Add authorization checks",
            "Add rate limiting",
            "Add CSRF protection",
            "Add security headers",
        ),
    ),
]


class ChecklistGenerator:
    """Generates implementation checklists for features."""

    def __init__(
        self,
        knowledge_base: FeatureKnowledgeBase | None = None,
        estimator: TimelineEstimator | None = None,
    ) -> None:
        self.knowledge_base = knowledge_base or FeatureKnowledgeBase()
        self.estimator = estimator or TimelineEstimator()

    def generate(
        self,
        feature: Feature,
        tech_stack: TechStack | None = None,
        enrich: bool = True,
    ) -> FeatureChecklist:
        """
        Build the checklist for ``feature``.

        Args:
            feature: Feature as given by the user or already enriched
            tech_stack: Adds stack-specific tasks when given
            enrich: Look the feature up in the knowledge base first. Pass
                False for features that are already final, such as those
                of a generated roadmap.

        Returns:
            FeatureChecklist with the (enriched) feature and its estimate
        """
        if enrich:
            feature = self.knowledge_base.enrich_feature(feature)
        category = feature.category or ""

        checklist = FeatureChecklist(
            feature=feature,
            estimate=self.estimator.estimate(feature),
            prerequisites=self.prerequisites(feature, category, tech_stack),
            implementation_tasks=self.implementation_tasks(feature),
            testing_tasks=self.testing_tasks(category, tech_stack),
            deployment_tasks=self.deployment_tasks(category),
            database_schema=database_schema_tasks(feature, tech_stack),
            api_endpoints=api_endpoint_tasks(feature, tech_stack),
            components=component_tasks(feature, tech_stack),
            tech_stack=tech_stack,
        )
        logger.debug(f"Generated checklist for '{feature.id}'")
        return checklist

    def prerequisites(
        self, feature: Feature, category: str, tech_stack: TechStack | None = None
    ) -> list[ChecklistItem]:
        items = _items(
            "Database schema created (if needed)",
            "Environment variables configured",
            "Error handling system in place",
        )

        if category == "foundation":
            items += _items("Project structure set up", "Development environment configured")
        if category in ("core", "advanced"):
            items += _items("Authentication system implemented")

        if feature.depends_on:
            items.append(ChecklistItem(f"Dependencies completed: {', '.join(feature.depends_on)}"))

        name = feature.name.lower()
        if "payment" in name:
            items += _items(
                "Payment provider account configured (Stripe, etc.)",
                "Webhook endpoint configured",
            )
        if "upload" in name or "file" in name:
            items += _items(
                "Storage provider configured (S3, Cloudinary, etc.)",
                "CDN configured (if needed)",
            )
        if "api" in name:
            items += _items(
                "API authentication middleware implemented",
                "Rate limiting configured",
            )

        items += stack_prerequisites(category, tech_stack)
        return items

    def implementation_tasks(self, feature: Feature) -> list[ChecklistItem]:
        sections = [s for s in (feature.checklist_sections or []) if s != "Prerequisites"]
        if sections:
            return [ChecklistItem(section, self.section_tasks(section)) for section in sections]

        return [
            ChecklistItem(
                "Core Implementation",
                _items(
                    "Design data model",
                    "Create database schema/migrations",
                    "Implement core logic",
                    "Create API endpoints",
                    "Implement frontend components",
                ),
            ),
            ChecklistItem(
                "Integration",
                _items(
                    "Integrate with authentication",
                    "Add error handling",
                    "Add logging and monitoring",
                ),
            ),
        ]

    def section_tasks(self, section: str) -> list[ChecklistItem]:
        for keywords, tasks in _SECTION_TASKS:
            if any(keyword in section for keyword in keywords):
                return _items(*tasks)
        return _items(f"Implement {section.lower()}", "Add error handling", "Add logging")

    def testing_tasks(self, category: str, tech_stack: TechStack | None = None) -> list[ChecklistItem]:
        items = _items(
            "Unit tests for core logic",
            "Integration tests for API endpoints",
            "Component tests for UI (if applicable)",
            "End-to-end tests for critical flows",
            "Error case testing",
            "Edge case testing",
        )
        if category == "foundation":
            items += _items("Security testing", "Performance testing")
        items += stack_testing_tasks(tech_stack)
        return items

    def deployment_tasks(self, category: str) -> list[ChecklistItem]:
        items = _items(
            "Environment variables configured",
            "Database migrations run",
            "Feature flags configured (if needed)",
            "Monitoring and alerts set up",
            "Documentation updated",
        )
        if category in ("foundation", "core"):
            items += _items("Backup strategy verified", "Rollback plan prepared")
        return items


STACK_MARKER = "🔧"


def _render_items(items: list[ChecklistItem], depth: int = 0) -> list[str]:
    lines = []
    for item in items:
        marker = f" {STACK_MARKER}" if item.stack_specific else ""
        lines.append(f"{'  ' * depth}- [ ] {item.text}{marker}")
        lines += _render_items(item.sub_items, depth + 1)
    return lines


def _render_groups(title: str, groups: list[ChecklistItem]) -> list[str]:
    lines = ["---", "", f"## {title}", ""]
    for group in groups:
        marker = f" {STACK_MARKER}" if group.stack_specific else ""
        lines += [f"### {group.text}{marker}", ""]
        lines += _render_items(group.sub_items)
        lines.append("")
    return lines


def render_checklist_markdown(checklist: FeatureChecklist) -> str:
    """Render a checklist as markdown with ``- [ ]`` task boxes."""
    feature = checklist.feature
    lines = [f"# {feature.name} Implementation Checklist", ""]
    lines.append(f"**Feature:** {feature.name}")
    if feature.category:
        lines.append(f"**Category:** {feature.category}")
    lines.append(f"**Estimated Time:** {checklist.estimate.days} days")
    lines.append(f"**Priority:** {feature.priority or 'medium'}")
    stack = checklist.tech_stack
    if stack is not None:
        lines.append(
            f"**Tech Stack:** {stack.framework} / {stack.backend} / {stack.database} / "
            f"{stack.language} / {stack.styling}"
        )
    lines.append("")

    if feature.description:
        lines += ["## Description", "", feature.description, ""]

    if feature.depends_on:
        lines += [f"**Depends On:** {', '.join(feature.depends_on)}", ""]

    lines += ["---", "", "## Prerequisites", ""]
    lines += _render_items(checklist.prerequisites)
    lines.append("")
    lines += _render_groups("Implementation Tasks", checklist.implementation_tasks)
    if checklist.database_schema:
        lines += _render_groups("Database Schema", checklist.database_schema)
    if checklist.api_endpoints:
        lines += _render_groups("API Endpoints", checklist.api_endpoints)
    if checklist.components:
        lines += _render_groups("Components", checklist.components)
    lines += ["---", "", "## Testing", ""]
    lines += _render_items(checklist.testing_tasks)
    lines += ["", "---", "", "## Deployment", ""]
    lines += _render_items(checklist.deployment_tasks)
    lines.append("")
    if stack is not None:
        lines += [f"{STACK_MARKER} marks tasks specific to the tech stack.", ""]

    return "\n".join(lines)
