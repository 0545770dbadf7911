# tests/unit/test_resolver.py
"""Tests for dependency graph resolution and cycle detection."""

import pytest

from scaffel.errors import UnknownDependencyError, ValidationError
from scaffel.planning import DependencyResolver
from scaffel.planning.resolver import find_cycles
from scaffel.planning.schemas import Feature


def _feature(feature_id, deps=None, **kwargs):
    return Feature(id=feature_id, name=kwargs.pop("name", feature_id), dependencies=deps, **kwargs)


class TestResolve:
    """Tests for DependencyResolver.resolve."""

    def test_fan_out_from_single_root(self):
        """Two features depending on one root produce two edges and no cycles."""
        graph = DependencyResolver().resolve([
            _feature("auth", []),
            _feature("users", ["auth"]),
            _feature("payments", ["auth"]),
        ])

        assert len(graph.nodes) == 3
        assert len(graph.edges) == 2
        assert graph.cycles == ()
        order = graph.critical_path
        assert order.index("auth") < order.index("users")
        assert order.index("auth") < order.index("payments")

    def test_edges_point_from_dependency_to_dependent(self):
        """Edge direction is dependency -> dependent."""
        graph = DependencyResolver().resolve([_feature("auth"), _feature("users", ["auth"])])

        edge = graph.edges[0]
        assert edge.from_id == "auth"
        assert edge.to_id == "users"

    def test_topological_order_is_stable(self):
        """Independent roots keep their input order."""
        graph = DependencyResolver().resolve([
            _feature("auth", []),
            _feature("users", ["auth"]),
            _feature("payments", ["auth"]),
        ])
        assert graph.critical_path == ("auth", "users", "payments")

    def test_two_node_cycle(self):
        """Mutual dependencies are reported as a closed loop."""
        graph = DependencyResolver().resolve([_feature("a", ["b"]), _feature("b", ["a"])])

        assert len(graph.cycles) > 0
        assert any({"a", "b"} <= set(cycle) for cycle in graph.cycles)
        for cycle in graph.cycles:
            assert cycle[0] == cycle[-1]

    def test_cycle_nodes_excluded_from_order(self):
        """Nodes on a cycle never reach in-degree zero."""
        graph = DependencyResolver().resolve([
            _feature("a", ["b"]),
            _feature("b", ["a"]),
            _feature("c", []),
        ])
        assert graph.critical_path == ("c",)

    def test_self_loop_is_a_cycle(self):
        """A feature depending on itself forms a one-node cycle."""
        graph = DependencyResolver().resolve([_feature("x", ["x"])])
        assert ("x", "x") in graph.cycles

    def test_disjoint_cycles_all_reported(self):
        """Every independent loop is found."""
        graph = DependencyResolver().resolve([
            _feature("a", ["b"]),
            _feature("b", ["a"]),
            _feature("c", ["d"]),
            _feature("d", ["c"]),
        ])
        assert any({"a", "b"} <= set(cycle) for cycle in graph.cycles)
        assert any({"c", "d"} <= set(cycle) for cycle in graph.cycles)

    def test_unknown_dependency_raises(self):
        """A dangling reference aborts resolution."""
        with pytest.raises(UnknownDependencyError) as exc_info:
            DependencyResolver().resolve([_feature("users", ["auth"])])

        assert exc_info.value.feature_id == "users"
        assert exc_info.value.dependency_id == "auth"
        assert 'depends on non-existent feature "auth"' in exc_info.value.message

    def test_unknown_dependency_is_validation_error(self):
        """Callers catching ValidationError also catch dangling references."""
        with pytest.raises(ValidationError):
            DependencyResolver().resolve([_feature("users", ["ghost"])])

    def test_empty_batch(self):
        """An empty batch yields an empty graph."""
        graph = DependencyResolver().resolve([])
        assert graph.nodes == ()
        assert graph.edges == ()
        assert graph.critical_path == ()

    def test_get_critical_path_returns_copy(self):
        """get_critical_path returns the topological order."""
        resolver = DependencyResolver()
        graph = resolver.resolve([_feature("a"), _feature("b", ["a"])])
        path = resolver.get_critical_path(graph)
        assert path == ["a", "b"]
        path.append("c")
        assert graph.critical_path == ("a", "b")


class TestValidateDependencies:
    """Tests for the existence/self-reference pre-check."""

    def test_valid_batch(self):
        result = DependencyResolver().validate_dependencies([_feature("a"), _feature("b", ["a"])])
        assert result.valid is True
        assert result.errors == []

    def test_collects_every_violation(self):
        """All problems are reported at once instead of the first one."""
        result = DependencyResolver().validate_dependencies([
            _feature("a", ["missing"]),
            _feature("b", ["b", "gone"]),
        ])

        assert result.valid is False
        assert result.errors == [
            'Feature "a" depends on non-existent feature "missing"',
            'Feature "b" cannot depend on itself',
            'Feature "b" depends on non-existent feature "gone"',
        ]

    def test_cycles_are_not_checked(self):
        """Mutual dependencies pass the pre-check."""
        result = DependencyResolver().validate_dependencies([_feature("a", ["b"]), _feature("b", ["a"])])
        assert result.valid is True


class TestFindCycles:
    """Tests for the standalone cycle search."""

    def test_acyclic(self):
        assert find_cycles({"a": ["b"], "b": ["c"], "c": []}, ["a", "b", "c"]) == []

    def test_loop_path_starts_at_revisited_node(self):
        """The reported loop begins where the search re-entered the stack."""
        cycles = find_cycles({"a": ["b"], "b": ["c"], "c": ["b"]}, ["a"])
        assert cycles == [["b", "c", "b"]]

    def test_missing_successors_treated_as_leaves(self):
        assert find_cycles({"a": ["zzz"]}, ["a"]) == []
