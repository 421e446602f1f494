from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ..models.processing_result import ReadResult
from ..models.sheet_row import KEY_COLUMN, MODULE_COLUMN, SheetRow, SheetSchema
from ..services.hierarchy import LocaleTreeBuilder
from ..services.progress import SheetProgressIndicator

"""Workbook reader.

Sheet layout:
    row 1    header (Key, Module, <locale>..., plus free columns such as Note)
    row 2    note / instructions row for translators, always discarded
    row 3+   messages

Wholly blank rows are skipped before the note row is taken, and blank cells
never produce a message. Cells are read with keep_default_na=False so message
texts such as "NA" or "null" survive verbatim.
"""

__all__ = [
    "SourceFileError",
    "MissingColumnsError",
    "SheetData",
    "open_workbook",
    "classify_header",
    "read_sheet",
    "read_workbook",
]

logger = logging.getLogger(__name__)


class SourceFileError(Exception):
    """Raised when the source workbook is missing or cannot be parsed."""


class MissingColumnsError(Exception):
    """Raised when a sheet with data rows lacks the Key or Module column."""


@dataclass
class SheetData:
    schema: SheetSchema
    rows: list[SheetRow]  # note 行除去済


def _is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip() == ""
    return value is None or bool(pd.isna(value))


def _cell_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _dedupe_headers(raw: Iterable[Any]) -> list[str]:
    """Header names with duplicates suffixed: en, en_1, en_2 ..."""
    seen: set[str] = set()
    counters: dict[str, int] = {}
    columns: list[str] = []
    for value in raw:
        name = _cell_text(value).strip()
        if name == "":
            columns.append("")
            continue
        if name in seen:
            # 生成した名前が実在の見出しと衝突しないよう空き番号まで進める
            n = counters.get(name, 0)
            candidate = name
            while candidate in seen:
                n += 1
                candidate = f"{name}_{n}"
            counters[name] = n
            name = candidate
        seen.add(name)
        columns.append(name)
    return columns


def open_workbook(path: Path) -> pd.ExcelFile:
    """Open the workbook, raising SourceFileError for missing/invalid files."""
    if not path.exists():
        raise SourceFileError(f"source file not found: {path}")
    try:
        return pd.ExcelFile(path, engine="openpyxl")
    except (OSError, ValueError, KeyError, zipfile.BadZipFile, InvalidFileException) as e:
        raise SourceFileError(f"invalid workbook {path}: {e}") from e


def classify_header(sheet_name: str, raw_header: Iterable[Any], ignored_cols: Iterable[str]) -> SheetSchema:
    """Classify each header cell as Key, Module, ignored or locale."""
    ignored_set = set(ignored_cols)
    columns = _dedupe_headers(raw_header)
    locales: list[str] = []
    ignored: list[str] = []
    for name in columns:
        if name in (KEY_COLUMN, MODULE_COLUMN):
            continue
        if name == "" or name in ignored_set:
            ignored.append(name)
        else:
            locales.append(name)
    return SheetSchema(
        sheet_name=sheet_name,
        columns=tuple(columns),
        locale_columns=tuple(locales),
        ignored_columns=tuple(ignored),
        has_key=KEY_COLUMN in columns,
        has_module=MODULE_COLUMN in columns,
    )


def read_sheet(xls: pd.ExcelFile, sheet_name: str, ignored_cols: Iterable[str]) -> SheetData:
    """Read one sheet into a schema plus normalized rows (note row dropped).

    Raises:
        MissingColumnsError: the sheet has data rows but no Key/Module header
    """
    df = xls.parse(sheet_name, header=None, dtype=object, keep_default_na=False)
    if df.shape[0] == 0:
        return SheetData(schema=classify_header(sheet_name, [], ignored_cols), rows=[])

    schema = classify_header(sheet_name, df.iloc[0].tolist(), ignored_cols)

    body: list[tuple[int, list[Any]]] = []
    for idx, raw in df.iloc[1:].iterrows():
        values = raw.tolist()
        if all(_is_blank(v) for v in values):
            continue
        # header = Excel 1 行目 (index 0)
        body.append((int(idx) + 1, values))

    # 先頭データ行は翻訳者向けメモ行
    body = body[1:]

    if body and schema.missing_columns:
        raise MissingColumnsError(f"sheet '{sheet_name}' missing columns: {schema.missing_columns}")

    rows: list[SheetRow] = []
    for row_number, values in body:
        cells = dict(zip(schema.columns, values, strict=False))
        messages = {
            locale: _cell_text(cells.get(locale))
            for locale in schema.locale_columns
            if not _is_blank(cells.get(locale))
        }
        rows.append(
            SheetRow(
                sheet_name=sheet_name,
                row_number=row_number,
                key=_cell_text(cells.get(KEY_COLUMN)).strip(),
                module=_cell_text(cells.get(MODULE_COLUMN)).strip(),
                messages=messages,
            )
        )
    return SheetData(schema=schema, rows=rows)


def read_workbook(
    path: Path,
    sheet_names: Iterable[str],
    ignored_cols: Iterable[str],
    builder: LocaleTreeBuilder | None = None,
) -> ReadResult:
    """Read the requested sheets and fold their rows into a LocaleTree.

    Sheets are processed in request order; a sheet absent from the workbook is
    reported and skipped.

    Raises:
        SourceFileError: missing or invalid workbook (nothing is read)
        MissingColumnsError: a sheet lacks the Key/Module column
        InvalidRowError: a row has an empty Key/Module or an empty key segment
    """
    if builder is None:
        builder = LocaleTreeBuilder()
    sheet_names = list(sheet_names)
    ignored_cols = list(ignored_cols)

    xls = open_workbook(path)
    total_rows = 0
    sheets_read: list[str] = []
    missing: list[str] = []
    try:
        available = {str(n) for n in xls.sheet_names}
        present = [n for n in sheet_names if n in available]
        progress = SheetProgressIndicator(file_name=path.name, total_sheets=len(present))
        for sheet_name in sheet_names:
            if sheet_name not in available:
                logger.warning(f"sheet '{sheet_name}' does not exist")
                missing.append(sheet_name)
                continue
            progress.start_sheet(sheet_name)
            sheet = read_sheet(xls, sheet_name, ignored_cols)
            total_rows += len(sheet.rows)
            for row in sheet.rows:
                builder.add_row(row)
            sheets_read.append(sheet_name)
            progress.finish_sheet(success=True, rows_processed=len(sheet.rows))
            logger.debug(
                f"sheet '{sheet_name}': rows={len(sheet.rows)} locales={list(sheet.schema.locale_columns)} "
                f"ignored={[c for c in sheet.schema.ignored_columns if c]}"
            )
    finally:
        xls.close()

    return ReadResult(
        total_rows=total_rows,
        locale_messages=builder.finalize(),
        sheets_read=tuple(sheets_read),
        missing_sheets=tuple(missing),
        blocked_inserts=builder.blocked,
    )
