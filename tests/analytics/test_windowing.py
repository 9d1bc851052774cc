"""Tests for time-window handling in analytics/engine.py."""

import pytest

from commit_insight.temporal.models import TimeWindow


class TestSetTimeWindow:
    def test_valid_window(self, abc_engine):
        assert abc_engine.set_time_window(1, 2) is True
        assert abc_engine.window == TimeWindow(1, 2)

    @pytest.mark.parametrize("start,end", [(10, 5), (-1, 5), (0, -1), (-3, -1)])
    def test_invalid_window_keeps_previous_state(self, abc_engine, start, end):
        abc_engine.set_time_window(0, 100)
        assert abc_engine.set_time_window(start, end) is False
        assert abc_engine.window == TimeWindow(0, 100)

    def test_invalid_window_without_previous(self, abc_engine):
        assert abc_engine.set_time_window(10, 5) is False
        assert abc_engine.window is None
        assert abc_engine.window_graph.is_empty()

    def test_single_instant_window(self, abc_engine):
        assert abc_engine.set_time_window(2, 2) is True
        assert abc_engine.window_graph.vertices() == ["B", "C"]

    def test_window_graph_holds_only_in_window_commits(self, abc_engine):
        abc_engine.set_time_window(2, 3)
        assert abc_engine.window_graph.weight("B", "C") == 1
        assert "A" not in abc_engine.window_graph
        assert abc_engine.global_graph.weight("A", "B") == 1

    def test_window_rebuilt_from_scratch(self, abc_engine):
        abc_engine.set_time_window(1, 1)
        abc_engine.set_time_window(3, 3)
        assert abc_engine.window_graph.vertices() == ["D"]

    def test_clear_time_window(self, abc_engine):
        abc_engine.set_time_window(1, 1)
        abc_engine.clear_time_window()
        assert abc_engine.window is None
        assert abc_engine.window_graph.is_empty()
        assert abc_engine.active_graph is abc_engine.global_graph

    def test_ingest_inside_active_window(self, abc_engine):
        abc_engine.set_time_window(0, 10)
        abc_engine.ingest_commit("dave", 5, "F-9", {"A", "D"})
        abc_engine.ingest_commit("dave", 50, "F-9", {"B", "D"})
        assert abc_engine.window_graph.weight("A", "D") == 1
        assert abc_engine.window_graph.weight("B", "D") == 0
        assert abc_engine.global_graph.weight("B", "D") == 1


class TestWindowedQueries:
    def test_components_use_window_graph(self, abc_engine):
        abc_engine.set_time_window(1, 1)
        assert abc_engine.software_components() == {frozenset({"A", "B"})}

    def test_components_follow_window_changes(self, abc_engine):
        abc_engine.set_component_threshold(1)
        before = abc_engine.software_components()
        abc_engine.set_time_window(2, 3)
        assert abc_engine.software_components() == {frozenset({"B", "C"}), frozenset({"D"})}
        abc_engine.clear_time_window()
        assert abc_engine.software_components() == before

    def test_threshold_applies_to_window_graph(self, make_engine, team_history):
        engine = make_engine(team_history)
        engine.set_time_window(100, 160)
        assert engine.set_component_threshold(2) is True
        assert engine.software_components() == {
            frozenset({"ui.py", "view.py"}),
            frozenset({"core.py", "model.py"}),
            frozenset({"db.py", "schema.py"}),
        }

    def test_late_window(self, make_engine, team_history):
        engine = make_engine(team_history)
        engine.set_time_window(300, 330)

        # No co-changes in the window: every file is its own component.
        assert len(engine.software_components()) == 4
        assert engine.experts_of(3) == {"erin"}
        assert engine.experts_of(1) == {"erin", "bob"}
        assert engine.broad_feature_tasks(3) == {"F-11"}
        assert engine.repeated_bug_tasks(2) == set()
        assert engine.repeated_bug_tasks(1) == {"B-7"}
        assert engine.busiest_files(1) == ["core.py", "model.py", "schema.py", "view.py"]

    def test_empty_window(self, make_engine, team_history):
        engine = make_engine(team_history)
        assert engine.set_time_window(1000, 2000) is True
        assert engine.software_components() == set()
        assert engine.experts_of(1) == set()
        assert engine.busiest_files(5) == []
        assert engine.summary().commits_in_scope == 0
