from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from locale_compiler.services import emitter
from locale_compiler.services.emitter import (
    emit_locale_tree,
    plan_writes,
    render_index,
    render_module_json,
)
from locale_compiler.services.hierarchy import InvalidRowError

TREE = {
    "en": {"common": {"a": {"b": {"c": "Hello"}}}, "errors": {"required": "Required"}},
    "ja": {"common": {"a": {"b": {"c": "こんにちは"}}}, "errors": {"required": "必須"}},
    "vi": {"common": {"a": {"b": {"c": "Xin chào"}}}, "errors": {"required": "Bắt buộc"}},
}


def test_render_locale_index():
    assert render_index(["common", "errors"], ".json") == (
        "import common from './common.json';\n"
        "import errors from './errors.json';\n"
        "\n"
        "const resources = {\n"
        "  common,\n"
        "  errors,\n"
        "};\n"
        "\n"
        "export default resources;\n"
    )


def test_render_root_index_without_suffix():
    content = render_index(["en", "ja"])
    assert "import en from './en';\n" in content
    assert "import ja from './ja';\n" in content


def test_render_index_quotes_non_identifiers():
    content = render_index(["zh-TW", "zh_TW", "1st"])
    assert "import zh_TW from './zh-TW';" in content
    assert "import zh_TW_1 from './zh_TW';" in content
    assert "import _1st from './1st';" in content
    assert "'zh-TW': zh_TW," in content
    assert "'zh_TW': zh_TW_1," in content
    assert "'1st': _1st" in content


def test_render_index_renames_reserved_words():
    content = render_index(["common", "default", "new", "delete", "pass"], ".json")
    assert "import _default from './default.json';" in content
    assert "import _new from './new.json';" in content
    assert "import _delete from './delete.json';" in content
    assert "'default': _default," in content
    # Python keyword, fine in TypeScript
    assert "import pass from './pass.json';" in content
    assert "  pass,\n" in content


@pytest.mark.parametrize("locale, module", [("..", "common"), ("en", "../escape"), ("en", "a\\b"), ("en'x", "common")])
def test_plan_writes_rejects_names_outside_out_dir(tmp_path: Path, locale: str, module: str):
    with pytest.raises(InvalidRowError):
        plan_writes({locale: {module: {"a": "x"}}}, tmp_path / "out")


def test_render_index_empty():
    assert render_index([]) == "const resources = {};\n\nexport default resources;\n"


def test_render_module_json_is_indented_utf8():
    assert render_module_json({"a": {"b": "ログイン"}}) == '{\n  "a": {\n    "b": "ログイン"\n  }\n}\n'


def test_plan_writes_order(tmp_path: Path):
    tasks = plan_writes(TREE, tmp_path)
    rel = [t.path.relative_to(tmp_path).as_posix() for t in tasks]
    assert rel == [
        "en/common.json", "en/errors.json", "en/index.ts",
        "ja/common.json", "ja/errors.json", "ja/index.ts",
        "vi/common.json", "vi/errors.json", "vi/index.ts",
        "index.ts",
    ]


def test_emit_writes_all_files(tmp_path: Path):
    out = tmp_path / "public" / "locales"
    result = emit_locale_tree(TREE, out)
    assert result.planned == 10
    assert result.written == 10
    assert result.failed == 0
    assert json.loads((out / "en" / "common.json").read_text(encoding="utf-8")) == {"a": {"b": {"c": "Hello"}}}
    assert "import errors from './errors.json';" in (out / "ja" / "index.ts").read_text(encoding="utf-8")
    assert "import vi from './vi';" in (out / "index.ts").read_text(encoding="utf-8")


def test_emit_counts_single_failure(tmp_path: Path):
    real_write = emitter._write_text
    failing = tmp_path / "ja" / "errors.json"

    def flaky(path: Path, content: str) -> None:
        if path == failing:
            raise PermissionError("permission denied")
        real_write(path, content)

    with patch("locale_compiler.services.emitter._write_text", side_effect=flaky):
        result = emit_locale_tree(TREE, tmp_path, max_workers=4)

    assert result.planned == 10
    assert result.written == 9
    assert result.failed == 1
    assert [f.path for f in result.failures] == [failing]
    assert "permission denied" in (result.failures[0].error or "")
    assert not failing.exists()
    assert (tmp_path / "ja" / "common.json").exists()


def test_emit_is_idempotent(tmp_path: Path):
    emit_locale_tree(TREE, tmp_path)
    first = {p: p.read_bytes() for p in sorted(tmp_path.rglob("*")) if p.is_file()}
    emit_locale_tree(TREE, tmp_path)
    second = {p: p.read_bytes() for p in sorted(tmp_path.rglob("*")) if p.is_file()}
    assert first == second
    assert len(first) == 10


def test_emit_results_keep_plan_order(tmp_path: Path):
    result = emit_locale_tree(TREE, tmp_path, max_workers=8)
    assert [r.path for r in result.results] == [t.path for t in plan_writes(TREE, tmp_path)]
