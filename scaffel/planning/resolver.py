# scaffel/planning/resolver.py
"""
Dependency resolution for feature batches.

Builds the dependency graph, detects cycles with a depth-first search and
computes a topological execution order with Kahn's algorithm.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

from scaffel.errors import UnknownDependencyError
from scaffel.planning.schemas import DependencyEdge, DependencyGraph, Feature

logger = logging.getLogger(__name__)


@dataclass
class DependencyValidation:
    """Result of the cheap existence/self-reference pre-check."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def find_cycles(adjacency: dict[str, list[str]], roots: list[str]) -> list[list[str]]:
    """
    Find closed loops in a directed graph.

    Runs a depth-first search from every unvisited root while keeping a
    recursion stack. A neighbour already on the stack closes a loop; the
    loop is the path from that neighbour's position to the current node,
    with the neighbour appended again. The same loop may be reported more
    than once when reached from different entry nodes.

    Args:
        adjacency: Node id -> successor ids
        roots: Node ids to start from, in the order to visit them

    Returns:
        List of cycles, each a list of ids whose first and last items match
    """
    cycles: list[list[str]] = []
    visited: set[str] = set()
    on_stack: set[str] = set()

    def visit(node_id: str, path: list[str]) -> None:
        visited.add(node_id)
        on_stack.add(node_id)
        path.append(node_id)

        for neighbour in adjacency.get(node_id, []):
            if neighbour not in visited:
                visit(neighbour, list(path))
            elif neighbour in on_stack:
                start = path.index(neighbour)
                cycles.append(path[start:] + [neighbour])

        on_stack.discard(node_id)

    for root in roots:
        if root not in visited:
            visit(root, [])

    return cycles


class DependencyResolver:
    """Validates dependency declarations and derives the dependency graph."""

    def resolve(self, features: list[Feature]) -> DependencyGraph:
        """
        Build the dependency graph for a batch of features.

        Args:
            features: Features of one batch

        Returns:
            DependencyGraph with edges, detected cycles and execution order

        Raises:
            UnknownDependencyError: If a dependency id is not in the batch
        """
        feature_ids = {feature.id for feature in features}
        edges: list[DependencyEdge] = []

        for feature in features:
            for dep in feature.depends_on:
                if dep not in feature_ids:
                    raise UnknownDependencyError(feature.id, dep)
                edges.append(DependencyEdge(from_id=dep, to_id=feature.id))

        node_ids = [feature.id for feature in features]
        adjacency = self._adjacency(node_ids, edges)
        cycles = find_cycles(adjacency, node_ids)
        order = self._topological_order(node_ids, adjacency, edges)

        if cycles:
            logger.warning(f"Detected {len(cycles)} dependency cycle(s) among {len(features)} features")
        logger.debug(f"Resolved {len(features)} features, {len(edges)} edges")

        return DependencyGraph(
            nodes=list(features),
            edges=edges,
            cycles=cycles,
            critical_path=order,
        )

    def get_critical_path(self, graph: DependencyGraph) -> list[str]:
        return list(graph.critical_path)

    def validate_dependencies(self, features: list[Feature]) -> DependencyValidation:
        """
        Check that every dependency exists and no feature depends on itself.

        Does not look for cycles. Returns one message per violation instead
        of raising, so callers can show every problem at once.
        """
        errors: list[str] = []
        feature_ids = {feature.id for feature in features}

        for feature in features:
            for dep in feature.depends_on:
                if dep not in feature_ids:
                    errors.append(f'Feature "{feature.id}" depends on non-existent feature "{dep}"')
                if dep == feature.id:
                    errors.append(f'Feature "{feature.id}" cannot depend on itself')

        return DependencyValidation(valid=not errors, errors=errors)

    @staticmethod
    def _adjacency(node_ids: list[str], edges: list[DependencyEdge]) -> dict[str, list[str]]:
        adjacency: dict[str, list[str]] = {node_id: [] for node_id in node_ids}
        for edge in edges:
            adjacency[edge.from_id].append(edge.to_id)
        return adjacency

    @staticmethod
    def _topological_order(
        node_ids: list[str],
        adjacency: dict[str, list[str]],
        edges: list[DependencyEdge],
    ) -> list[str]:
        # Kahn's algorithm; nodes on a cycle never reach in-degree 0
        in_degree: dict[str, int] = {node_id: 0 for node_id in node_ids}
        for edge in edges:
            in_degree[edge.to_id] += 1

        queue = deque(node_id for node_id, degree in in_degree.items() if degree == 0)
        order: list[str] = []

        while queue:
            node_id = queue.popleft()
            order.append(node_id)
            for neighbour in adjacency[node_id]:
                in_degree[neighbour] -= 1
                if in_degree[neighbour] == 0:
                    queue.append(neighbour)

        return order
