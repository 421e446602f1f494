from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..excel.reader import read_workbook
from ..models.config_models import ImportConfig
from ..models.processing_result import ImportResult, ImportStatus
from .confirmation import OVERWRITE_PROMPT, confirm, render_import_info
from .emitter import emit_locale_tree

"""Import orchestration: read -> build -> confirm -> emit.

run_import() is the only place that touches every stage. Fatal errors from the
reader (SourceFileError, MissingColumnsError, InvalidRowError) propagate to the
CLI before anything is written.
"""

logger = logging.getLogger(__name__)

ConfirmFunc = Callable[[str], bool]


def run_import(
    config: ImportConfig,
    confirm_func: ConfirmFunc | None = None,
    max_workers: int | None = None,
) -> ImportResult:
    """Compile config.source into resource files under config.out_dir.

    Args:
        config: parsed ImportConfig
        confirm_func: replaces the interactive prompt (ignored with assume_yes)
        max_workers: thread pool size for the write phase

    Returns:
        ImportResult (CANCELLED when the confirmation was declined)
    """
    start_time = datetime.now(UTC)
    source = config.source.resolve()
    out_dir = config.out_dir.resolve()

    read = read_workbook(source, config.sheet_names, config.ignored_cols)
    stat = source.stat()

    for line in render_import_info(source, out_dir, stat, read.locales, read.total_rows):
        logger.info(line)
    if read.blocked_inserts:
        logger.warning(f"{read.blocked_inserts} conflicting entries were skipped (first entry kept)")

    if config.assume_yes:
        proceed = True
    else:
        proceed = (confirm_func or confirm)(OVERWRITE_PROMPT)

    if not proceed:
        logger.info("Import has been cancelled!")
        end_time = datetime.now(UTC)
        return ImportResult(
            status=ImportStatus.CANCELLED,
            source=source,
            out_dir=out_dir,
            total_rows=read.total_rows,
            locales=tuple(read.locales),
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
        )

    write_start = datetime.now(UTC)
    emit = emit_locale_tree(read.locale_messages, out_dir, max_workers=max_workers)
    end_time = datetime.now(UTC)
    write_ms = (end_time - write_start).total_seconds() * 1000

    if emit.failed:
        logger.warning(f"Imported {emit.written} of {emit.planned} files in {write_ms:.2f}ms ({emit.failed} failed)")
    else:
        logger.info(f"✨ Imported {emit.written} {'file' if emit.written == 1 else 'files'} in {write_ms:.2f}ms")

    return ImportResult(
        status=ImportStatus.COMPLETED,
        source=source,
        out_dir=out_dir,
        total_rows=read.total_rows,
        locales=tuple(read.locales),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        emit=emit,
    )
