"""Read commit rows from JSON Lines or CSV files and feed them to an engine.

JSON Lines: one object per line with keys ``developer``, ``timestamp``,
``task`` and ``files`` (a list of paths).

CSV: header ``developer,timestamp,task,files`` with the files of one commit
separated by ``;``.

Rows are not validated here; the engine does that on ingestion. A malformed
row becomes a RejectedRecord and the rest of the batch is still loaded.
"""

from __future__ import annotations

import csv
import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from ..exceptions import IngestionError, InvalidCommitError
from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..analytics.engine import AnalyticsEngine

logger = get_logger(__name__)

FIELDS = ("developer", "timestamp", "task", "files")
FILE_SEPARATOR = ";"

JSONL_SUFFIXES = frozenset({".jsonl", ".ndjson", ".json"})
CSV_SUFFIXES = frozenset({".csv"})


@dataclass(frozen=True)
class CommitRow:
    """One unvalidated commit as read from a file."""

    line: int
    developer: Any = None
    timestamp: Any = None
    task: Any = None
    files: Any = None
    parse_error: Optional[str] = None  # set when the line could not be decoded


@dataclass(frozen=True)
class RejectedRecord:
    line: int
    reason: str
    row: CommitRow


@dataclass
class IngestReport:
    accepted: int = 0
    rejected: list[RejectedRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.accepted + len(self.rejected)

    @property
    def ok(self) -> bool:
        return not self.rejected


def read_jsonl(path: Path) -> Iterator[CommitRow]:
    """Yield one CommitRow per non-blank line."""
    with _open(path) as f:
        for lineno, raw in enumerate(_decoded(f, path), start=1):
            if not raw.strip():
                continue
            try:
                obj = json.loads(raw)
            except json.JSONDecodeError as e:
                yield CommitRow(line=lineno, parse_error=f"invalid JSON: {e.msg}")
                continue
            if not isinstance(obj, dict):
                yield CommitRow(line=lineno, parse_error="expected a JSON object")
                continue
            missing = [k for k in FIELDS if k not in obj]
            if missing:
                yield CommitRow(line=lineno, parse_error=f"missing keys: {', '.join(missing)}")
                continue
            yield CommitRow(
                line=lineno,
                developer=obj["developer"],
                timestamp=obj["timestamp"],
                task=obj["task"],
                files=obj["files"],
            )


def read_csv(path: Path) -> Iterator[CommitRow]:
    """Yield one CommitRow per data row. Line numbers count the header as line 1."""
    with _open(path, newline="") as f:
        reader = csv.DictReader(_decoded(f, path))
        header = reader.fieldnames or []
        missing = [k for k in FIELDS if k not in header]
        if missing:
            raise IngestionError(path, f"CSV header is missing columns: {', '.join(missing)}")

        for row in reader:
            lineno = reader.line_num
            cell = row.get("files") or ""
            files = [name.strip() for name in cell.split(FILE_SEPARATOR)] if cell.strip() else []
            yield CommitRow(
                line=lineno,
                developer=row.get("developer"),
                timestamp=_coerce_int(row.get("timestamp")),
                task=row.get("task"),
                files=files,
            )


def read_rows(path: Path) -> Iterator[CommitRow]:
    """Dispatch to the reader matching the file suffix."""
    suffix = path.suffix.lower()
    if suffix in JSONL_SUFFIXES:
        return read_jsonl(path)
    if suffix in CSV_SUFFIXES:
        return read_csv(path)
    raise IngestionError(path, f"unsupported file type '{suffix or path.name}'")


def load_into(engine: AnalyticsEngine, rows: Iterable[CommitRow]) -> IngestReport:
    """Ingest every row, turning InvalidCommitError into a RejectedRecord."""
    report = IngestReport()
    for row in rows:
        if row.parse_error is not None:
            _reject(report, row, row.parse_error)
            continue
        try:
            engine.ingest_commit(row.developer, row.timestamp, row.task, row.files)
        except InvalidCommitError as e:
            _reject(report, row, str(e))
            continue
        report.accepted += 1

    logger.info("Loaded %d commits, rejected %d", report.accepted, len(report.rejected))
    return report


def load_file(engine: AnalyticsEngine, path: Path) -> IngestReport:
    return load_into(engine, read_rows(path))


def _reject(report: IngestReport, row: CommitRow, reason: str) -> None:
    logger.warning("Rejected commit on line %d: %s", row.line, reason)
    report.rejected.append(RejectedRecord(line=row.line, reason=reason, row=row))


def _coerce_int(value: Optional[str]) -> Any:
    """CSV cells are strings; hand back an int when the cell holds one."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return value


def _decoded(lines: Iterable[str], path: Path) -> Iterator[str]:
    """Pass lines through, reporting undecodable bytes as an IngestionError."""
    try:
        yield from lines
    except UnicodeDecodeError as e:
        raise IngestionError(path, f"not valid UTF-8: {e.reason}")


def _open(path: Path, newline: Optional[str] = None):
    try:
        return open(path, encoding="utf-8", newline=newline)
    except OSError as e:
        raise IngestionError(path, e.strerror or str(e))
