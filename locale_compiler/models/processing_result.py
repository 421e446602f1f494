from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .sheet_row import LocaleTree

"""Result models for the compiler run.

WriteResult is the typed outcome of one file write, EmitResult aggregates the
concurrent write phase and ImportResult is what the CLI renders as SUMMARY.
"""


class ImportStatus(Enum):
    """Final state of an import run.

    - COMPLETED: the write phase ran (possibly with individual write failures)
    - CANCELLED: the user declined the overwrite confirmation, nothing written
    """
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class WriteResult:
    """Outcome of writing a single output file."""
    path: Path
    ok: bool
    error: str | None = None  # 失敗時のみ (OSError の文字列表現)


@dataclass(frozen=True)
class EmitResult:
    """Aggregated outcome of the write phase, results in plan order."""
    results: tuple[WriteResult, ...]

    @property
    def planned(self) -> int:
        return len(self.results)

    @property
    def written(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.planned - self.written

    @property
    def failures(self) -> list[WriteResult]:
        return [r for r in self.results if not r.ok]


@dataclass(frozen=True)
class ReadResult:
    """Output of the workbook reader."""
    total_rows: int
    locale_messages: LocaleTree
    sheets_read: tuple[str, ...] = ()
    missing_sheets: tuple[str, ...] = ()
    blocked_inserts: int = 0

    @property
    def locales(self) -> list[str]:
        return list(self.locale_messages.keys())


@dataclass(frozen=True)
class ImportResult:
    """Aggregated results of one run, rendered as the SUMMARY line."""
    status: ImportStatus
    source: Path
    out_dir: Path
    total_rows: int
    locales: tuple[str, ...]
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    emit: EmitResult | None = None  # CANCELLED の場合 None
