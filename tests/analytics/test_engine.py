"""Tests for analytics/engine.py - components and derived analytics."""

import random

import pytest

from commit_insight.analytics import AnalyticsEngine, EngineSummary
from commit_insight.config import AnalyticsConfig
from commit_insight.exceptions import (
    InvalidCommitError,
    InvalidLimitError,
    InvalidThresholdError,
)


class TestIngestCommit:
    def test_updates_store_and_global_graph(self):
        engine = AnalyticsEngine()
        record = engine.ingest_commit("alice", 1, "F-1", {"a.py", "b.py"})
        assert record.task == "F-1"
        assert len(engine.store) == 1
        assert engine.global_graph.weight("a.py", "b.py") == 1

    @pytest.mark.parametrize("task", ["B-", "X-1", "B1"])
    def test_rejects_malformed_task(self, task):
        engine = AnalyticsEngine()
        with pytest.raises(InvalidCommitError):
            engine.ingest_commit("alice", 1, task, {"a.py"})

    def test_rejected_commit_changes_nothing(self):
        engine = AnalyticsEngine()
        with pytest.raises(InvalidCommitError):
            engine.ingest_commit("alice", -5, "B-1", {"a.py", "b.py"})
        assert len(engine.store) == 0
        assert engine.global_graph.is_empty()

    def test_bad_default_threshold(self):
        with pytest.raises(InvalidThresholdError):
            AnalyticsEngine(default_threshold=0)


class TestSoftwareComponents:
    def test_default_threshold_is_one(self, abc_engine):
        assert abc_engine.component_threshold == 1
        assert abc_engine.software_components() == {
            frozenset({"A", "B", "C"}),
            frozenset({"D"}),
        }

    def test_threshold_two_gives_singletons(self, abc_engine):
        assert abc_engine.set_component_threshold(2) is True
        assert abc_engine.software_components() == {
            frozenset({"A"}),
            frozenset({"B"}),
            frozenset({"C"}),
            frozenset({"D"}),
        }

    @pytest.mark.parametrize("threshold", [0, -3])
    def test_non_positive_threshold_refused(self, abc_engine, threshold):
        abc_engine.set_component_threshold(2)
        assert abc_engine.set_component_threshold(threshold) is False
        assert abc_engine.component_threshold == 2

    def test_recomputed_after_ingestion(self, abc_engine):
        abc_engine.set_component_threshold(1)
        abc_engine.ingest_commit("dave", 4, "F-3", {"C", "D"})
        assert abc_engine.software_components() == {frozenset({"A", "B", "C", "D"})}

    def test_empty_engine(self):
        assert AnalyticsEngine().software_components() == set()

    def test_from_config_uses_configured_threshold(self):
        engine = AnalyticsEngine.from_config(AnalyticsConfig(component_threshold=2))
        engine.ingest_commit("alice", 1, "F-1", {"a", "b"})
        assert engine.component_threshold == 2
        assert engine.software_components() == {frozenset({"a"}), frozenset({"b"})}

    def test_component_of(self, abc_engine):
        assert abc_engine.component_of("B") == frozenset({"A", "B", "C"})
        assert abc_engine.component_of("D") == frozenset({"D"})
        assert abc_engine.component_of("nope") is None


class TestRepeatedBugTasks:
    def test_same_file_twice_in_one_bug(self, make_engine):
        engine = make_engine(
            [
                ("alice", 1, "B-1", {"Z"}),
                ("bob", 2, "B-1", {"Z", "Y"}),
                ("carol", 3, "B-2", {"Z"}),
            ]
        )
        assert engine.repeated_bug_tasks(2) == {"B-1"}

    def test_threshold_one_flags_every_bug(self, make_engine, team_history):
        engine = make_engine(team_history)
        assert engine.repeated_bug_tasks(1) == {"B-7", "B-8"}

    def test_feature_tasks_ignored(self, make_engine):
        engine = make_engine([("alice", 1, "F-1", {"Z"}), ("alice", 2, "F-1", {"Z"})])
        assert engine.repeated_bug_tasks(2) == set()

    def test_counts_span_commits(self, make_engine, team_history):
        engine = make_engine(team_history)
        assert engine.repeated_bug_tasks(2) == {"B-7"}
        assert engine.repeated_bug_tasks(3) == set()

    @pytest.mark.parametrize("threshold", [0, -1])
    def test_invalid_threshold(self, abc_engine, threshold):
        with pytest.raises(InvalidThresholdError):
            abc_engine.repeated_bug_tasks(threshold)


class TestBroadFeatureTasks:
    def test_against_threshold_two_components(self, make_engine, team_history):
        engine = make_engine(team_history)
        engine.set_component_threshold(2)
        assert engine.broad_feature_tasks(1) == {"F-1", "F-2", "F-3", "F-10", "F-11"}
        assert engine.broad_feature_tasks(2) == {"F-10", "F-11"}
        assert engine.broad_feature_tasks(3) == {"F-11"}

    def test_against_default_components(self, make_engine, team_history):
        # At threshold 1 ui/view/core/model form one component.
        engine = make_engine(team_history)
        assert engine.broad_feature_tasks(2) == {"F-11"}

    def test_bug_tasks_ignored(self, abc_engine):
        assert "B-1" not in abc_engine.broad_feature_tasks(1)

    def test_invalid_threshold(self, abc_engine):
        with pytest.raises(InvalidThresholdError):
            abc_engine.broad_feature_tasks(0)


class TestExpertsOf:
    def test_developer_covering_one_component(self, make_engine):
        engine = make_engine(
            [
                ("alice", 1, "F-1", {"a", "b"}),
                ("alice", 2, "F-2", {"b", "c"}),
                ("bob", 3, "F-3", {"x"}),
            ]
        )
        assert "alice" in engine.experts_of(1)
        assert "alice" not in engine.experts_of(2)

    def test_counts_distinct_components(self, make_engine, team_history):
        engine = make_engine(team_history)
        engine.set_component_threshold(2)
        assert engine.experts_of(1) == {"alice", "bob", "carol", "dave", "erin"}
        assert engine.experts_of(2) == {"dave", "erin"}
        assert engine.experts_of(3) == {"erin"}
        assert engine.experts_of(4) == set()

    def test_invalid_threshold(self, abc_engine):
        with pytest.raises(InvalidThresholdError):
            abc_engine.experts_of(0)


class TestBusiestFiles:
    def test_tie_at_boundary_not_needed(self, make_engine):
        engine = make_engine(
            [
                ("alice", 1, "F-1", {"X", "Y"}),
                ("alice", 2, "F-1", {"X"}),
                ("alice", 3, "F-1", {"Y"}),
                ("alice", 4, "F-1", {"Y"}),
            ]
        )
        assert engine.busiest_files(1) == ["Y"]

    def test_ties_at_boundary_included(self, make_engine, team_history):
        engine = make_engine(team_history)
        assert engine.busiest_files(1) == ["core.py", "view.py"]
        assert engine.busiest_files(2) == ["core.py", "view.py"]
        assert engine.busiest_files(3) == [
            "core.py",
            "view.py",
            "model.py",
            "schema.py",
            "ui.py",
        ]

    def test_limit_larger_than_file_count(self, make_engine, team_history):
        engine = make_engine(team_history)
        ranked = engine.busiest_files(100)
        assert len(ranked) == 6
        assert ranked[-1] == "db.py"

    def test_empty_history(self):
        assert AnalyticsEngine().busiest_files(3) == []

    @pytest.mark.parametrize("limit", [0, -2])
    def test_invalid_limit(self, abc_engine, limit):
        with pytest.raises(InvalidLimitError):
            abc_engine.busiest_files(limit)

    @pytest.mark.parametrize("seed", range(5))
    def test_tallies_independent_of_ingestion_order(self, make_engine, team_history, seed):
        shuffled = list(team_history)
        random.Random(seed).shuffle(shuffled)
        engine = make_engine(shuffled)

        expected = {}
        for _, _, _, files in team_history:
            for f in files:
                expected[f] = expected.get(f, 0) + 1

        assert engine.file_tallies() == expected
        assert engine.busiest_files(3) == make_engine(team_history).busiest_files(3)


class TestSummary:
    def test_counts(self, make_engine, team_history):
        engine = make_engine(team_history)
        engine.set_component_threshold(2)
        summary = engine.summary()

        assert isinstance(summary, EngineSummary)
        assert summary.total_commits == 11
        assert summary.bug_commits == 3
        assert summary.feature_commits == 8
        assert summary.commits_in_scope == 11
        assert summary.developers == 5
        assert summary.files == 6
        assert summary.cochange_edges == 5
        assert summary.component_threshold == 2
        assert summary.component_count == 3
        assert summary.window is None

    def test_to_dict(self, abc_engine):
        abc_engine.set_time_window(1, 2)
        data = abc_engine.summary().to_dict()
        assert data["window"] == {"start": 1, "end": 2}
        assert data["commits_in_scope"] == 2
