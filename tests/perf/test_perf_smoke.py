from __future__ import annotations

import time
from pathlib import Path

from locale_compiler.services.emitter import emit_locale_tree
from locale_compiler.services.hierarchy import LocaleTreeBuilder

"""Performance smoke test: building and writing a realistic catalogue stays fast."""


def test_build_and_emit_budget(tmp_path: Path):
    locales = ["en", "ja", "vi", "ko"]
    modules = [f"module_{m}" for m in range(20)]
    rows = 20_000

    start = time.perf_counter()
    b = LocaleTreeBuilder()
    for j in range(rows):
        key_path = [f"section_{j % 50}", f"group_{j % 7}", f"key_{j}"]
        for locale in locales:
            b.insert(locale, modules[j % len(modules)], key_path, f"[{locale}] {j}")
    tree = b.finalize()
    build_elapsed = time.perf_counter() - start

    result = emit_locale_tree(tree, tmp_path)
    total_elapsed = time.perf_counter() - start

    assert result.written == len(locales) * len(modules) + len(locales) + 1
    # CI でも十分に余裕のある上限
    assert build_elapsed < 5.0, f"tree build too slow: {build_elapsed:.3f}s"
    assert total_elapsed < 15.0, f"build+emit too slow: {total_elapsed:.3f}s"
