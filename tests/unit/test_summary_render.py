from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

from locale_compiler.models.processing_result import EmitResult, ImportResult, ImportStatus, WriteResult
from locale_compiler.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/([0-9]+)\s+failed=([0-9]+)\s+locales=([0-9]+)\s+"
    r"rows=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def _result(emit: EmitResult | None, elapsed: float = 2.0) -> ImportResult:
    t = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    return ImportResult(
        status=ImportStatus.COMPLETED if emit else ImportStatus.CANCELLED,
        source=Path("source.xlsx"),
        out_dir=Path("public/locales"),
        total_rows=42,
        locales=("en", "ja", "vi"),
        start_time=t,
        end_time=t,
        elapsed_seconds=elapsed,
        emit=emit,
    )


def _emit(ok: int, failed: int) -> EmitResult:
    results = [WriteResult(Path(f"f{i}.json"), True) for i in range(ok)]
    results += [WriteResult(Path(f"x{i}.json"), False, "boom") for i in range(failed)]
    return EmitResult(results=tuple(results))


def test_render_summary_line_all_written():
    line = render_summary_line(_result(_emit(10, 0)))
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.groups() == ("10", "10", "0", "3", "42", "2")


def test_render_summary_line_partial():
    line = render_summary_line(_result(_emit(9, 1), elapsed=0.1234))
    assert line == "SUMMARY files=9/10 failed=1 locales=3 rows=42 elapsed_sec=0.123"


def test_render_summary_line_tiny_elapsed_no_scientific_notation():
    line = render_summary_line(_result(_emit(1, 0), elapsed=0.00004))
    assert "e-" not in line
    assert line.endswith("elapsed_sec=0.00004")


def test_render_summary_line_without_emit():
    line = render_summary_line(_result(None, elapsed=0))
    assert line == "SUMMARY files=0/0 failed=0 locales=3 rows=42 elapsed_sec=0"
