from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from os import stat_result
from pathlib import Path

"""Confirmation gate shown before any output file is overwritten.

render_import_info() builds the summary lines, confirm() asks the question.
The orchestrator accepts any Callable[[str], bool] in place of confirm(), and
--yes skips the question entirely.
"""

__all__ = [
    "AFFIRMATIVE_ANSWERS",
    "OVERWRITE_PROMPT",
    "nice_bytes",
    "render_import_info",
    "confirm",
]

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})
OVERWRITE_PROMPT = "Current json files (if any) will be overwritten, do you want to continue? (Y/n) "

_UNITS = ["bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def nice_bytes(size: int) -> str:
    """Human readable size: 512 -> "512 bytes", 2048 -> "2.0 KB", 20480 -> "20 KB"."""
    n = float(size or 0)
    level = 0
    while n >= 1024 and level < len(_UNITS) - 1:
        n /= 1024
        level += 1
    precision = 1 if n < 10 and level > 0 else 0
    return f"{n:.{precision}f} {_UNITS[level]}"


def render_import_info(
    source: Path,
    out_dir: Path,
    stat: stat_result,
    locales: Iterable[str],
    total_rows: int,
) -> list[str]:
    timestamp = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
    found = ", ".join(locales) or "(none)"
    return [
        "Import language from XLSX file",
        "Input file:",
        f"  • Path:            {source}",
        f"  • Size:            {nice_bytes(stat.st_size)}",
        f"  • Last updated at: {timestamp}",
        f"  • Found locales:   {found}",
        f"  • Total rows:      {total_rows} {'rows' if total_rows > 1 else 'row'}",
        "Output directory:",
        f"  • Path:            {out_dir}",
    ]


def confirm(prompt: str = OVERWRITE_PROMPT, input_func: Callable[[str], str] | None = None) -> bool:
    """Ask a yes/no question; only "y"/"yes" (any case) counts as yes.

    An empty answer or end of input declines. input_func defaults to input().
    """
    try:
        answer = (input_func or input)(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS
