#!/usr/bin/env python3
"""
Example: Basic usage of Commit Insight as a Python library
"""

from pathlib import Path

from commit_insight import AnalyticsEngine
from commit_insight.ingestion import load_file

engine = AnalyticsEngine()
report = load_file(engine, Path(__file__).parent / "sample_commits.jsonl")
print(f"Loaded {report.accepted} commit(s), rejected {len(report.rejected)}")
for rejected in report.rejected:
    print(f"  line {rejected.line}: {rejected.reason}")

engine.set_component_threshold(2)
for component in engine.software_components():
    print("component:", ", ".join(sorted(component)))

print("experts:", sorted(engine.experts_of(2)))
print("broad features:", sorted(engine.broad_feature_tasks(2)))
print("repeated bugs:", sorted(engine.repeated_bug_tasks(2)))
print("busiest:", engine.busiest_files(3))

# Same questions, restricted to the second half of the history
if engine.set_time_window(300, 400):
    print("busiest (300-400):", engine.busiest_files(3))
