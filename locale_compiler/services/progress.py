from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

- ProgressTracker: one bar over the output files of the write phase
- SheetProgressIndicator: a one-line status per imported sheet

Both are silent when stdout is not a TTY (CI, pipes, tests) so that log output
stays free of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
    "SheetProgressIndicator",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress bar over written files.

    advance() may only be called from the thread that owns the tracker; the
    emitter calls it while draining completed futures.
    """

    def __init__(self, total_files: int, *, description: str = "Writing files") -> None:
        self.total_files = total_files
        self.description = description
        self.completed = 0
        self.failed = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, file_path: Path, success: bool = True) -> None:
        """Record one finished file write."""
        self.completed += 1
        if not success:
            self.failed += 1

        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(file=file_path.name, failed=self.failed)
            self.pbar.update(1)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class SheetProgressIndicator:
    """Simple per-sheet status line for the read phase."""

    def __init__(self, file_name: str, total_sheets: int) -> None:
        self.file_name = file_name
        self.total_sheets = total_sheets
        self.current_sheet = 0
        self.enabled = is_tty_enabled()

    def start_sheet(self, sheet_name: str) -> None:
        self.current_sheet += 1

        if self.enabled:
            progress_str = f"  Sheet {self.current_sheet}/{self.total_sheets}: {sheet_name}"
            print(progress_str, end="", flush=True)

    def finish_sheet(self, success: bool = True, rows_processed: int = 0) -> None:
        if self.enabled:
            status = "✓" if success else "✗"
            if rows_processed > 0:
                print(f" - {rows_processed} rows {status}")
            else:
                print(f" {status}")
