# tests/unit/test_organizer.py
"""Tests for phase organization."""

import pytest

from scaffel.errors import UnknownDependencyError
from scaffel.planning import PhaseOrganizer, TimelineEstimator
from scaffel.planning.organizer import PHASE_NAMES, dependency_depths, phase_goal, phase_name
from scaffel.planning.schemas import Feature, TimeEstimate


def _feature(feature_id, deps=None):
    return Feature(id=feature_id, name=feature_id.title(), dependencies=deps)


def _ids(phase):
    return [feature.id for feature in phase.features]


def _chain(length):
    features = [_feature("f0", [])]
    for i in range(1, length):
        features.append(_feature(f"f{i}", [f"f{i - 1}"]))
    return features


def _ladder(layers):
    """Two features per layer, each depending on both features of the layer below."""
    features = [_feature("l0a", []), _feature("l0b", [])]
    for layer in range(1, layers):
        below = [f"l{layer - 1}a", f"l{layer - 1}b"]
        features += [_feature(f"l{layer}a", below), _feature(f"l{layer}b", below)]
    return features


class TestOrganize:
    """Tests for PhaseOrganizer.organize."""

    def test_chain_of_three(self):
        """auth <- users <- payments gives Foundation, Core Features, then a depth phase."""
        phases = PhaseOrganizer().organize([
            _feature("auth", []),
            _feature("users", ["auth"]),
            _feature("payments", ["users"]),
        ])

        assert [p.name for p in phases] == ["Foundation", "Core Features", "Advanced Features"]
        assert [p.number for p in phases] == [1, 2, 3]
        assert [_ids(p) for p in phases] == [["auth"], ["users"], ["payments"]]
        assert phases[0].goal == "Set up core infrastructure"

    def test_empty_input(self):
        assert PhaseOrganizer().organize([]) == []

    def test_every_feature_placed_once(self):
        features = [
            _feature("db", []),
            _feature("auth", ["db"]),
            _feature("users", ["auth", "db"]),
            _feature("search", ["db"]),
            _feature("admin", ["users", "search"]),
            _feature("cache", []),
        ]
        phases = PhaseOrganizer().organize(features)

        placed = [fid for phase in phases for fid in _ids(phase)]
        assert sorted(placed) == sorted(f.id for f in features)
        assert len(placed) == len(set(placed))

    def test_core_requires_only_foundation_dependencies(self):
        """A feature mixing foundation and non-foundation deps is not core."""
        phases = PhaseOrganizer().organize([
            _feature("db", []),
            _feature("auth", ["db"]),
            _feature("users", ["auth", "db"]),
        ])
        assert _ids(phases[1]) == ["auth"]
        assert _ids(phases[2]) == ["users"]

    def test_no_foundation_phase_when_every_feature_has_dependencies(self):
        """Numbers still start at 1 when Foundation is empty."""
        phases = PhaseOrganizer().organize([_feature("a", ["b"]), _feature("b", ["a"])])
        assert phases[0].number == 1
        assert "Foundation" not in [p.name for p in phases]

    def test_depth_phases_in_ascending_order(self):
        """Deeper features come later regardless of input order."""
        phases = PhaseOrganizer().organize([
            _feature("d", ["c"]),
            _feature("c", ["b"]),
            _feature("b", ["a"]),
            _feature("a", []),
        ])

        assert [_ids(p) for p in phases] == [["a"], ["b"], ["c"], ["d"]]
        assert [p.name for p in phases] == [
            "Foundation",
            "Core Features",
            "Advanced Features",
            "Integrations",
        ]

    def test_deep_chains_clamp_to_last_name(self):
        phases = PhaseOrganizer().organize(_chain(8))

        assert [p.number for p in phases] == list(range(1, 9))
        assert [p.name for p in phases[-3:]] == ["Production Ready"] * 3
        assert phases[-1].goal == "Prepare for production"

    def test_idempotent(self):
        features = _chain(4)
        organizer = PhaseOrganizer()
        assert organizer.organize(features) == organizer.organize(features)

    def test_layered_graph_phases(self):
        """A 25-layer ladder yields one phase per layer."""
        phases = PhaseOrganizer().organize(_ladder(25))

        assert len(phases) == 25
        assert _ids(phases[-1]) == ["l24a", "l24b"]
        assert phases[-1].number == 25

    def test_cyclic_input_still_organized(self):
        """Cycles fall back to per-path depth walks."""
        phases = PhaseOrganizer().organize([
            _feature("root", []),
            _feature("a", ["b", "root"]),
            _feature("b", ["a"]),
        ])
        placed = sorted(fid for phase in phases for fid in _ids(phase))
        assert placed == ["a", "b", "root"]

    def test_unknown_dependency_raises(self):
        with pytest.raises(UnknownDependencyError):
            PhaseOrganizer().organize([_feature("users", ["auth"])])

    def test_estimate_phase_uses_estimator(self):
        """Phase estimates come from the injected estimator."""
        organizer = PhaseOrganizer(estimator=TimelineEstimator())
        phase = organizer.organize([_feature("auth", [])])[0]
        assert organizer.estimate_phase(phase) == TimeEstimate(days=7, weeks=2)


class TestDependencyDepths:
    """Tests for depth computation."""

    def test_chain(self):
        features = _chain(4)
        depths = dependency_depths(features, features)
        assert depths == {"f0": 0, "f1": 1, "f2": 2, "f3": 3}

    def test_depth_follows_deepest_dependency(self):
        features = [
            _feature("a", []),
            _feature("b", ["a"]),
            _feature("c", ["a", "b"]),
        ]
        assert dependency_depths(features, features)["c"] == 2

    def test_missing_dependency_counts_as_zero(self):
        feature = _feature("a", ["ghost"])
        assert dependency_depths([feature], [feature]) == {"a": 1}

    def test_cycle_terminates(self):
        """A revisit on the current path stops the descent."""
        features = [_feature("a", ["b"]), _feature("b", ["a"])]
        depths = dependency_depths(features, features)
        assert set(depths) == {"a", "b"}
        assert all(depth >= 1 for depth in depths.values())

    def test_layered_graph_walks_each_node_once(self):
        """Shared dependencies are not re-walked on acyclic input."""
        features = _ladder(25)
        depths = dependency_depths(features, features, acyclic=True)

        assert depths["l24a"] == 24
        assert depths["l0b"] == 0

    def test_cached_and_path_walks_agree_on_dag(self):
        features = [
            _feature("a", []),
            _feature("b", ["a"]),
            _feature("c", ["a", "b"]),
            _feature("d", ["c", "ghost"]),
            _feature("e", ["b"]),
        ]
        assert dependency_depths(features, features, acyclic=True) == dependency_depths(features, features)

    def test_long_chain_without_recursion_limit(self):
        features = _chain(2000)
        depths = dependency_depths([features[-1]], features)
        assert depths == {"f1999": 1999}


class TestPhaseLabels:
    def test_phase_name_clamps(self):
        assert phase_name(0) == "Foundation"
        assert phase_name(99) == PHASE_NAMES[-1]

    def test_phase_goal_clamps(self):
        assert phase_goal(2) == "Add advanced functionality"
        assert phase_goal(42) == "Prepare for production"
