# tests/unit/test_parsers.py
"""Tests for product, feature and tech stack parsing."""

import logging

from scaffel.config.schema import FeatureSection
from scaffel.parsers import (
    FeatureParser,
    ProductParser,
    TechStackParser,
    feature_id_from_name,
)
from scaffel.planning.schemas import Feature, TimeEstimate


class TestProductParser:
    """Tests for ProductParser."""

    def test_normalizes_input(self):
        product = ProductParser().parse({"name": "  Shop ", "type": "ECommerce", "domain": "retail"})
        assert product.name == "Shop"
        assert product.type == "ecommerce"
        assert product.domain == "retail"

    def test_missing_type_defaults_to_saas(self):
        assert ProductParser().parse({"name": "Shop"}).type == "saas"

    def test_unknown_type_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            product = ProductParser().parse({"name": "Shop", "type": "desktop"})
        assert product.type == "saas"
        assert "Unknown product type 'desktop'" in caplog.text

    def test_validate_requires_name(self):
        parser = ProductParser()
        valid, errors = parser.validate(parser.parse({}))
        assert valid is False
        assert errors == ["Product name is required"]

    def test_validate_name_length(self):
        parser = ProductParser()
        valid, errors = parser.validate(parser.parse({"name": "x" * 256}))
        assert valid is False
        assert "255 characters or less" in errors[0]


class TestFeatureParser:
    """Tests for FeatureParser."""

    def test_ids_from_names(self):
        assert feature_id_from_name("User  Management", 0) == "user-management"
        assert feature_id_from_name("   ", 3) == "feature-3"

    def test_plain_names_leave_details_unset(self):
        [feature] = FeatureParser().parse(["Payments"])
        assert feature.id == "payments"
        assert feature.dependencies is None
        assert feature.priority is None

    def test_dicts_and_sections(self):
        features = FeatureParser().parse([
            {"name": "Auth", "id": "auth", "priority": "high"},
            FeatureSection(name="Users", dependencies=["auth"]),
        ])
        assert features[0].id == "auth"
        assert features[0].priority == "high"
        assert features[1].id == "users"
        assert features[1].dependencies == ["auth"]

    def test_feature_instances_pass_through(self):
        feature = Feature(id="x", name="X")
        assert FeatureParser().parse([feature])[0] is feature

    def test_estimate_weeks_derived(self):
        [feature] = FeatureParser().parse([{"name": "Payments", "estimatedTime": {"days": 8}}])
        assert feature.estimated_time == TimeEstimate(days=8, weeks=2)

    def test_explicit_weeks_kept(self):
        [feature] = FeatureParser().parse([{"name": "Payments", "estimated_time": {"days": 8, "weeks": 4}}])
        assert feature.estimated_time == TimeEstimate(days=8, weeks=4)

    def test_parse_from_string(self):
        features = FeatureParser().parse_from_string("Auth, Payments,, ")
        assert [f.name for f in features] == ["Auth", "Payments"]

    def test_validate_duplicates_and_blank_names(self):
        parser = FeatureParser()
        features = [
            Feature(id="auth", name="Auth"),
            Feature(id="auth", name="Auth again"),
            Feature(id="nameless", name=" "),
        ]
        valid, errors = parser.validate(features)

        assert valid is False
        assert "Duplicate feature ID: auth" in errors
        assert 'Feature with ID "nameless" has no name' in errors

    def test_validate_ok(self):
        valid, errors = FeatureParser().validate(FeatureParser().parse(["A", "B"]))
        assert valid is True
        assert errors == []


class TestTechStackParser:
    """Tests for TechStackParser."""

    def test_defaults(self):
        stack = TechStackParser().parse(None)
        assert stack.framework == "nextjs"
        assert stack.backend == "supabase"
        assert stack.database == "postgresql"
        assert stack.language == "typescript"
        assert stack.styling == "tailwind"

    def test_unknown_values_fall_back(self):
        stack = TechStackParser().parse({"framework": " Vue ", "database": "oracle"})
        assert stack.framework == "vue"
        assert stack.database == "postgresql"

    def test_parse_from_string_assigns_slots(self):
        stack = TechStackParser().parse_from_string("react, MongoDB, firebase, cobol")
        assert stack.framework == "react"
        assert stack.database == "mongodb"
        assert stack.backend == "firebase"
        assert stack.styling == "tailwind"
