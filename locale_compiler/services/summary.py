from __future__ import annotations

from ..models.processing_result import ImportResult

"""SUMMARY line rendering.

Format:
    SUMMARY files={written}/{planned} failed={failed} locales={n} rows={rows} elapsed_sec={elapsed}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ImportResult) -> str:
    """Render the SUMMARY line for a completed run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from pathlib import Path
        >>> from locale_compiler.models.processing_result import (
        ...     EmitResult, ImportResult, ImportStatus, WriteResult)
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> emit = EmitResult(results=(WriteResult(Path("en/common.json"), True),
        ...                            WriteResult(Path("en/index.ts"), True),
        ...                            WriteResult(Path("index.ts"), False, "denied")))
        >>> result = ImportResult(
        ...     status=ImportStatus.COMPLETED, source=Path("s.xlsx"), out_dir=Path("out"),
        ...     total_rows=12, locales=("en",), start_time=t, end_time=t,
        ...     elapsed_seconds=2.0, emit=emit)
        >>> render_summary_line(result)
        'SUMMARY files=2/3 failed=1 locales=1 rows=12 elapsed_sec=2'
    """
    written = result.emit.written if result.emit else 0
    planned = result.emit.planned if result.emit else 0
    failed = result.emit.failed if result.emit else 0
    return (
        f"SUMMARY files={written}/{planned} "
        f"failed={failed} "
        f"locales={len(result.locales)} "
        f"rows={result.total_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
