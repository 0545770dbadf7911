# scaffel/planning/estimator.py
"""
Heuristic effort estimation for features, phases and whole roadmaps.

Single-feature estimate:
    days = round(base * category * priority * dependencies * type), min 1

Phase estimate (critical-path-like):
    longest feature + 20% of every other feature + 1 day (2 if > 3 features)
"""

import logging
import math
from dataclasses import dataclass

from scaffel.planning.schemas import Feature, Phase, TimeEstimate

logger = logging.getLogger(__name__)

DEFAULT_BASE_DAYS = 3

# category -> (base days, multiplier); other categories keep 3 days / 1.0
CATEGORY_FACTORS: dict[str, tuple[int, float]] = {
    "foundation": (5, 1.5),
    "core": (4, 1.2),
    "enhancement": (2, 0.8),
}

PRIORITY_MULTIPLIERS: dict[str, float] = {
    "critical": 1.3,
    "high": 1.1,
    "medium": 1.0,
    "low": 0.9,
}


@dataclass(frozen=True)
class KeywordRule:
    """Name-keyword rule: matches when ``any_of`` hits and all of ``all_of`` hit."""

    label: str
    base_days: int
    multiplier: float
    any_of: tuple[str, ...] = ()
    all_of: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        if self.any_of and not any(keyword in name for keyword in self.any_of):
            return False
        return all(keyword in name for keyword in self.all_of)


# Evaluated in order, first match wins
KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("authentication", 5, 1.4, any_of=("auth", "authentication")),
    KeywordRule("payments", 7, 1.5, any_of=("payment", "billing")),
    KeywordRule("user management", 4, 1.2, all_of=("user", "management")),
    KeywordRule("api", 4, 1.3, any_of=("api", "integration")),
    KeywordRule("dashboard", 4, 1.2, any_of=("dashboard", "analytics")),
    KeywordRule("notifications", 3, 1.1, any_of=("notification", "email")),
    KeywordRule("search", 3, 1.1, any_of=("search", "filter")),
)

PHASE_COORDINATION_SHARE = 0.2


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class EstimationFactors:
    """Inputs of a heuristic single-feature estimate."""

    base_days: int
    category_multiplier: float
    priority_multiplier: float
    dependency_multiplier: float
    type_multiplier: float
    matched_rule: str | None = None

    @property
    def raw_days(self) -> float:
        return (
            self.base_days
            * self.category_multiplier
            * self.priority_multiplier
            * self.dependency_multiplier
            * self.type_multiplier
        )


def dependency_multiplier(count: int) -> float:
    if count == 0:
        return 1.0
    if count <= 2:
        return 1.1
    if count <= 4:
        return 1.2
    return 1.4


class TimelineEstimator:
    """Estimates effort for features, phases and roadmap totals."""

    def estimate(self, feature: Feature) -> TimeEstimate:
        """
        Estimate effort for a single feature.

        An explicit ``estimated_time`` is returned with its days untouched;
        weeks are derived from days only when missing or zero.
        """
        explicit = feature.estimated_time
        if explicit is not None:
            return TimeEstimate(
                days=explicit.days,
                weeks=explicit.weeks or math.ceil(explicit.days / 5),
            )

        factors = self.explain(feature)
        days = max(1, round_half_up(factors.raw_days))
        return TimeEstimate.from_days(days)

    def explain(self, feature: Feature) -> EstimationFactors:
        """
        Compute the heuristic factors for a feature.

        Unknown categories and priorities fall back to a 1.0 multiplier.
        """
        base_days, category_multiplier = CATEGORY_FACTORS.get(
            feature.category or "", (DEFAULT_BASE_DAYS, 1.0)
        )
        priority_multiplier = PRIORITY_MULTIPLIERS.get(feature.priority or "", 1.0)

        name = feature.name.lower()
        type_multiplier = 1.0
        matched: str | None = None
        for rule in KEYWORD_RULES:
            if rule.matches(name):
                base_days = rule.base_days
                type_multiplier = rule.multiplier
                matched = rule.label
                break

        return EstimationFactors(
            base_days=base_days,
            category_multiplier=category_multiplier,
            priority_multiplier=priority_multiplier,
            dependency_multiplier=dependency_multiplier(len(feature.depends_on)),
            type_multiplier=type_multiplier,
            matched_rule=matched,
        )

    def estimate_phase(self, phase: Phase) -> TimeEstimate:
        """
        Estimate a phase as longest feature plus coordination overhead.

        Args:
            phase: Phase whose features are estimated individually

        Returns:
            {0, 0} for an empty phase, the feature's own estimate for a
            single-feature phase, otherwise the combined estimate
        """
        if not phase.features:
            return TimeEstimate(days=0, weeks=0)

        estimates = [self.estimate(feature) for feature in phase.features]
        if len(estimates) == 1:
            return estimates[0]

        ordered = sorted(estimates, key=lambda est: est.days, reverse=True)
        longest, others = ordered[0], ordered[1:]
        coordination = sum(est.days * PHASE_COORDINATION_SHARE for est in others)
        overhead = 2 if len(phase.features) > 3 else 1

        days = round_half_up(longest.days + coordination + overhead)
        return TimeEstimate.from_days(days)

    def estimate_total(self, phases: list[Phase]) -> TimeEstimate:
        """Sum phase days, using attached phase estimates where present."""
        total_days = 0
        for phase in phases:
            if phase.estimated_time is not None:
                total_days += phase.estimated_time.days
            else:
                total_days += self.estimate_phase(phase).days
        return TimeEstimate.from_days(total_days)
