from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from locale_compiler.services.confirmation import (
    OVERWRITE_PROMPT,
    confirm,
    nice_bytes,
    render_import_info,
)


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 bytes"),
        (512, "512 bytes"),
        (1024, "1.0 KB"),
        (2048, "2.0 KB"),
        (20480, "20 KB"),
        (5 * 1024 * 1024, "5.0 MB"),
    ],
)
def test_nice_bytes(size: int, expected: str):
    assert nice_bytes(size) == expected


@pytest.mark.parametrize("answer", ["y", "Y", "yes", " YES ", "Yes\n"])
def test_confirm_affirmative(answer: str):
    assert confirm(input_func=lambda _prompt: answer) is True


@pytest.mark.parametrize("answer", ["", "n", "no", "yep", "ok"])
def test_confirm_declines_everything_else(answer: str):
    assert confirm(input_func=lambda _prompt: answer) is False


def test_confirm_eof_declines():
    def _eof(_prompt: str) -> str:
        raise EOFError
    assert confirm(input_func=_eof) is False


def test_confirm_passes_prompt():
    seen = []
    confirm(input_func=lambda p: seen.append(p) or "y")
    assert seen == [OVERWRITE_PROMPT]


def test_confirm_defaults_to_builtin_input():
    with patch("builtins.input", return_value="yes") as mock_input:
        assert confirm() is True
    mock_input.assert_called_once_with(OVERWRITE_PROMPT)


def test_render_import_info(tmp_path: Path):
    src = tmp_path / "source.xlsx"
    src.write_bytes(b"x" * 2048)
    lines = render_import_info(src, tmp_path / "out", os.stat(src), ["en", "ja"], 1)
    text = "\n".join(lines)
    assert str(src) in text
    assert "2.0 KB" in text
    assert "Found locales:   en, ja" in text
    assert "Total rows:      1 row" in text
    assert str(tmp_path / "out") in text


def test_render_import_info_plural_and_no_locales(tmp_path: Path):
    src = tmp_path / "source.xlsx"
    src.write_bytes(b"")
    text = "\n".join(render_import_info(src, tmp_path, os.stat(src), [], 5))
    assert "5 rows" in text
    assert "(none)" in text
