# Shared pytest fixtures
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from locale_compiler.logging.init import reset_logging

HEADER = ["Screen ID", "Key", "Module", "en", "ja", "Note"]
NOTE_ROW = ["(memo)", "Do not edit", "keys", "English", "Japanese", "translator notes"]

WorkbookFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch, tmp_path: Path) -> Path:
    (tmp_path / ".i18n").mkdir()
    monkeypatch.chdir(tmp_path)
    # 実行環境の I18N_* が混入しないように
    for var in ("I18N_SOURCE", "I18N_OUT_DIR", "I18N_SHEET_NAMES", "I18N_IGNORED_COLS"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture()
def make_workbook() -> WorkbookFactory:
    def _make(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    return [
        HEADER,
        NOTE_ROW,
        ["SCR001", "auth.login.title", "common", "Sign in", "ログイン", "top of page"],
        ["SCR001", "auth.login.submit", "common", "Submit", "送信", None],
        ["SCR002", "required", "errors", "This field is required", "必須項目です", None],
        ["SCR002", "network.timeout", "errors", "Request timed out", None, "ja pending"],
    ]


@pytest.fixture()
def sample_workbook(temp_workdir: Path, make_workbook: WorkbookFactory, sample_rows) -> Path:
    return make_workbook(temp_workdir / ".i18n" / "source.xlsx", {"Locale Messages": sample_rows})
