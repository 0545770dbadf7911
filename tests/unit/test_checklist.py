# tests/unit/test_checklist.py
"""Tests for implementation checklist generation."""

import pytest

from scaffel.checklist import ChecklistGenerator, render_checklist_markdown
from scaffel.parsers import TechStack
from scaffel.planning.schemas import Feature, TimeEstimate


@pytest.fixture
def generator():
    return ChecklistGenerator()


class TestChecklistGenerator:
    """Tests for ChecklistGenerator.generate."""

    def test_known_feature_uses_knowledge_sections(self, generator):
        checklist = generator.generate(Feature(id="payments", name="Payments"))

        titles = [task.text for task in checklist.implementation_tasks]
        assert titles == ["Database Schema", "API Endpoints", "Webhooks", "UI Components", "Security", "Testing"]
        assert checklist.feature.category == "integration"
        assert checklist.estimate == TimeEstimate(days=8, weeks=2)

    def test_section_keywords_pick_tasks(self, generator):
        checklist = generator.generate(Feature(id="payments", name="Payments"))
        by_title = {task.text: [sub.text for sub in task.sub_items] for task in checklist.implementation_tasks}

        assert "Create migration files" in by_title["Database Schema"]
        assert "Add request validation" in by_title["API Endpoints"]
        assert "Add CSRF protection" in by_title["Security"]
        assert by_title["Webhooks"][0] == "Implement webhooks"

    def test_payment_prerequisites(self, generator):
        checklist = generator.generate(Feature(id="payments", name="Payments", dependencies=["auth"]))
        texts = [item.text for item in checklist.prerequisites]

        assert "Payment provider account configured (Stripe, etc.)" in texts
        assert "Dependencies completed: auth" in texts

    def test_foundation_extras(self, generator):
        checklist = generator.generate(Feature(id="database", name="Database"))

        assert "Project structure set up" in [i.text for i in checklist.prerequisites]
        assert "Security testing" in [i.text for i in checklist.testing_tasks]
        assert "Rollback plan prepared" in [i.text for i in checklist.deployment_tasks]

    def test_unknown_feature_heuristic_estimate(self, generator):
        """Unknown features get default sections and a core heuristic estimate."""
        checklist = generator.generate(Feature(id="widget", name="Widget"))

        assert [t.text for t in checklist.implementation_tasks] == ["Implementation", "Testing"]
        # core (4 * 1.2), medium priority
        assert checklist.estimate.days == 5

    def test_no_sections_falls_back_to_generic_tasks(self, generator):
        tasks = generator.implementation_tasks(Feature(id="x", name="X", checklist_sections=["Prerequisites"]))
        assert [t.text for t in tasks] == ["Core Implementation", "Integration"]

    def test_enrich_false_keeps_feature_as_given(self, generator):
        """Roadmap features are already final and must not be looked up again."""
        feature = Feature(id="payments", name="Payments")
        checklist = generator.generate(feature, enrich=False)

        assert checklist.feature is feature
        assert checklist.feature.category is None
        # payment rule 7 * 1.5 = 10.5, rounded half up
        assert checklist.estimate.days == 11
        assert [t.text for t in checklist.implementation_tasks] == ["Core Implementation", "Integration"]


def _titles(groups):
    return [group.text for group in groups]


def _sub_texts(groups, title):
    for group in groups:
        if group.text == title:
            return [sub.text for sub in group.sub_items]
    raise AssertionError(f"no group {title!r}")


class TestStackSections:
    """Tests for the database, API and component sections."""

    def test_default_stack_adds_stack_groups(self, generator):
        checklist = generator.generate(Feature(id="authentication", name="Authentication"), TechStack())

        assert "Add RLS policies" in _titles(checklist.database_schema)
        assert _titles(checklist.database_schema)[0] == "Create authentication tables"
        assert "POST /api/auth/signup - User registration" in _sub_texts(checklist.api_endpoints, "Authentication endpoints")
        assert "Next.js API route structure" in _titles(checklist.api_endpoints)
        assert "Create file: app/api/authentication/route.ts" in _sub_texts(
            checklist.api_endpoints, "Next.js API route structure"
        )
        assert _titles(checklist.components)[-2:] == ["React patterns", "Styling"]
        assert checklist.tech_stack == TechStack()

    def test_stack_items_are_flagged(self, generator):
        checklist = generator.generate(Feature(id="authentication", name="Authentication"), TechStack())
        rls = next(g for g in checklist.database_schema if g.text == "Add RLS policies")

        assert rls.stack_specific
        assert all(item.stack_specific for item in rls.sub_items)
        assert not checklist.database_schema[0].stack_specific

    def test_other_stack_omits_supabase_and_nextjs_groups(self, generator):
        stack = TechStack(framework="vue", backend="custom", database="mysql", styling="css")
        checklist = generator.generate(Feature(id="orders", name="Orders"), stack)

        assert "Add RLS policies" not in _titles(checklist.database_schema)
        assert "Next.js API route structure" not in _titles(checklist.api_endpoints)
        assert "Styling" not in _titles(checklist.components)
        assert "React patterns" not in _titles(checklist.components)
        assert "GET /api/orders - List all items" in _sub_texts(checklist.api_endpoints, "API endpoints")
        assert "OrdersForm component (create/edit)" in _sub_texts(checklist.components, "Orders components")

    def test_no_stack_keeps_neutral_groups_only(self, generator):
        checklist = generator.generate(Feature(id="payments", name="Payments"))

        assert _titles(checklist.database_schema) == ["Create payment tables", "Add indexes", "Create migration files"]
        assert _titles(checklist.components) == ["Payment components", "Component structure"]
        assert not any(item.stack_specific for item in checklist.prerequisites)

    def test_stack_prerequisites_and_component_tests(self, generator):
        checklist = generator.generate(Feature(id="database", name="Database"), TechStack())
        prerequisites = [item.text for item in checklist.prerequisites]

        assert "Next.js project initialized" in prerequisites
        assert "PostgreSQL database created" in prerequisites
        assert "Supabase client configured" in prerequisites
        assert "Component tests: rendering" in [item.text for item in checklist.testing_tasks]


class TestRenderChecklist:
    def test_markdown_layout(self, generator):
        markdown = render_checklist_markdown(generator.generate(Feature(id="payments", name="Payments")))

        assert markdown.startswith("# Payments Implementation Checklist")
        assert "**Estimated Time:** 8 days" in markdown
        assert "**Priority:** medium" in markdown
        assert "## Prerequisites" in markdown
        assert "### Webhooks" in markdown
        assert "- [ ] Webhook endpoint configured" in markdown
        assert "## Deployment" in markdown

    def test_stack_sections_rendered_with_marker(self, generator):
        checklist = generator.generate(Feature(id="authentication", name="Authentication"), TechStack())
        markdown = render_checklist_markdown(checklist)

        assert "**Tech Stack:** nextjs / supabase / postgresql / typescript / tailwind" in markdown
        assert "## Database Schema" in markdown
        assert "## API Endpoints" in markdown
        assert "## Components" in markdown
        assert "### Add RLS policies 🔧" in markdown
        assert "- [ ] Enable RLS on all tables 🔧" in markdown
        assert "  - [ ] Schema for request body" in markdown
