"""Shared test fixtures for Commit Insight tests."""

import pytest

from commit_insight.analytics import AnalyticsEngine


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_engine():
    """Build an engine from (developer, timestamp, task, files) tuples."""

    def _make(commits, **kwargs):
        engine = AnalyticsEngine(**kwargs)
        for developer, timestamp, task, files in commits:
            engine.ingest_commit(developer, timestamp, task, files)
        return engine

    return _make


@pytest.fixture
def abc_engine(make_engine):
    """Commits {A,B}, {B,C}, {D}: A-B-C chain plus an isolated D."""
    return make_engine(
        [
            ("alice", 1, "F-1", {"A", "B"}),
            ("bob", 2, "F-2", {"B", "C"}),
            ("carol", 3, "B-1", {"D"}),
        ]
    )


@pytest.fixture
def team_history():
    """A small project: ui, core and db areas with a few cross-cutting tasks.

    ui.py/view.py change together three times, core.py/model.py twice,
    db.py/schema.py twice. F-10 spans ui and core, F-11 spans all three.
    """
    return [
        ("alice", 100, "F-1", {"ui.py", "view.py"}),
        ("alice", 110, "F-1", {"ui.py", "view.py"}),
        ("bob", 120, "F-2", {"core.py", "model.py"}),
        ("bob", 130, "B-7", {"core.py", "model.py"}),
        ("carol", 140, "F-3", {"db.py", "schema.py"}),
        ("carol", 150, "B-8", {"db.py", "schema.py"}),
        ("dave", 160, "F-10", {"ui.py", "view.py", "core.py"}),
        ("erin", 300, "F-11", {"view.py"}),
        ("erin", 310, "F-11", {"model.py"}),
        ("erin", 320, "F-11", {"schema.py"}),
        ("bob", 330, "B-7", {"core.py"}),
    ]
