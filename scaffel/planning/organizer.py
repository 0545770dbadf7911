# scaffel/planning/organizer.py
"""
Phase organization.

Partitions a feature batch into sequential delivery phases:
Foundation (no dependencies), Core Features (depend only on Foundation),
then one phase per dependency depth for everything else.
"""

import logging

from scaffel.planning.estimator import TimelineEstimator
from scaffel.planning.resolver import DependencyResolver
from scaffel.planning.schemas import Feature, Phase, TimeEstimate

logger = logging.getLogger(__name__)

PHASE_NAMES = [
    "Foundation",
    "Core Features",
    "Advanced Features",
    "Integrations",
    "Optimization",
    "Production Ready",
]

PHASE_GOALS = [
    "Set up core infrastructure",
    "Build core user-facing features",
    "Add advanced functionality",
    "Connect with external services",
    "Improve performance and UX",
    "Prepare for production",
]


def phase_name(depth: int) -> str:
    return PHASE_NAMES[min(depth, len(PHASE_NAMES) - 1)]


def phase_goal(depth: int) -> str:
    return PHASE_GOALS[min(depth, len(PHASE_GOALS) - 1)]


def dependency_depths(
    features: list[Feature],
    all_features: list[Feature],
    acyclic: bool = False,
) -> dict[str, int]:
    """
    Compute the dependency depth of each feature.

    Depth is 0 without dependencies, otherwise 1 + the deepest dependency.
    Dependencies missing from ``all_features`` count as depth 0, and so does
    a dependency revisited on the current path, which keeps cycles finite.
    Uses an explicit stack, so deep chains do not hit the recursion limit.

    With ``acyclic`` set the caller guarantees there are no cycles: finished
    depths are cached and shared between features, so every node is walked
    once. Without it, each feature is walked along its own paths, since a
    node's depth on a cycle depends on where the walk entered it.
    """
    by_id = {feature.id: feature for feature in all_features}
    depths: dict[str, int] = {}
    known: dict[str, int] = {}

    for feature in features:
        if feature.id in known:
            depths[feature.id] = known[feature.id]
            continue

        # Frame: [feature id, dependency ids, path ids, dependency index, deepest child so far]
        stack: list[list] = [[feature.id, feature.depends_on, frozenset({feature.id}), 0, -1]]
        result = 0
        while stack:
            frame = stack[-1]
            current_id, deps, path, index, deepest = frame
            if index < len(deps):
                frame[3] += 1
                dep = by_id.get(deps[index])
                if dep is None or dep.id in path:
                    frame[4] = max(deepest, 0)
                elif dep.id in known:
                    frame[4] = max(deepest, known[dep.id])
                else:
                    next_path = path if acyclic else path | {dep.id}
                    stack.append([dep.id, dep.depends_on, next_path, 0, -1])
                continue

            stack.pop()
            result = deepest + 1 if deps else 0
            if acyclic:
                known[current_id] = result
            if stack:
                stack[-1][4] = max(stack[-1][4], result)
        depths[feature.id] = result

    return depths


class PhaseOrganizer:
    """Groups features into ordered phases and estimates each phase."""

    def __init__(
        self,
        resolver: DependencyResolver | None = None,
        estimator: TimelineEstimator | None = None,
    ) -> None:
        self.resolver = resolver or DependencyResolver()
        self.estimator = estimator or TimelineEstimator()

    def organize(self, features: list[Feature]) -> list[Phase]:
        """
        Partition features into phases numbered from 1.

        Args:
            features: Feature batch; dependencies must reference ids in it

        Returns:
            Ordered phases; every feature appears in exactly one phase

        Raises:
            UnknownDependencyError: If a dependency id is not in the batch
        """
        if not features:
            return []

        graph = self.resolver.resolve(features)

        groups: list[tuple[str, str, list[Feature]]] = []
        placed: set[str] = set()

        foundation = [f for f in features if not f.depends_on]
        if foundation:
            groups.append((PHASE_NAMES[0], PHASE_GOALS[0], foundation))
            placed.update(f.id for f in foundation)

        foundation_ids = {f.id for f in foundation}
        core = [
            f
            for f in features
            if f.id not in placed and f.depends_on and all(dep in foundation_ids for dep in f.depends_on)
        ]
        if core:
            groups.append((PHASE_NAMES[1], PHASE_GOALS[1], core))
            placed.update(f.id for f in core)

        remaining = [f for f in features if f.id not in placed]
        if remaining:
            depths = dependency_depths(remaining, features, acyclic=not graph.cycles)
            by_depth: dict[int, list[Feature]] = {}
            for feature in remaining:
                by_depth.setdefault(depths[feature.id], []).append(feature)
            for depth in sorted(by_depth):
                groups.append((phase_name(depth), phase_goal(depth), by_depth[depth]))

        phases = [
            Phase(number=index, name=name, goal=goal, features=members)
            for index, (name, goal, members) in enumerate(groups, start=1)
        ]
        logger.info(f"Organized {len(features)} features into {len(phases)} phases")
        return phases

    def estimate_phase(self, phase: Phase) -> TimeEstimate:
        return self.estimator.estimate_phase(phase)
