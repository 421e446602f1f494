from __future__ import annotations

import json
import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from ..models.processing_result import EmitResult, WriteResult
from ..models.sheet_row import LocaleTree, MessageNode
from .hierarchy import check_resource_name
from .progress import ProgressTracker

"""File emitter: writes the LocaleTree as JSON resources plus TypeScript indexes.

Layout under out_dir:

    <locale>/<module>.json   nested key -> message mapping, 2-space indented
    <locale>/index.ts        imports every module json, default-exports them
    index.ts                 imports every locale index, default-exports them

All writes are submitted to a thread pool and joined before returning. A failed
write is logged and reported in the EmitResult; the remaining writes go on.
"""

__all__ = [
    "WriteTask",
    "render_module_json",
    "render_index",
    "plan_writes",
    "write_file",
    "emit_locale_tree",
]

logger = logging.getLogger(__name__)

INDEX_FILE = "index.ts"
MODULE_SUFFIX = ".json"

# ES reserved words plus the strict-mode ones; invalid as import bindings
TS_RESERVED_WORDS = frozenset(
    "break case catch class const continue debugger default delete do else enum export extends"
    " false finally for function if import in instanceof new null return super switch this throw"
    " true try typeof var void while with"
    " let static yield implements interface package private protected public".split()
)


@dataclass(frozen=True)
class WriteTask:
    path: Path
    content: str


def render_module_json(node: MessageNode) -> str:
    return json.dumps(node, indent=2, ensure_ascii=False) + "\n"


def _ts_identifier(name: str, used: set[str]) -> str:
    ident = re.sub(r"\W", "_", name)
    if not ident or ident[0].isdigit() or ident in TS_RESERVED_WORDS:
        ident = f"_{ident}"
    base, n = ident, 1
    while ident in used:
        ident = f"{base}_{n}"
        n += 1
    used.add(ident)
    return ident


def _ts_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")


def render_index(names: list[str], suffix: str = "") -> str:
    """Render an index.ts that imports each name and default-exports them all.

    Names that are not valid identifiers (e.g. "zh-TW") are imported under a
    sanitized identifier and exported under their quoted original name.
    """
    if not names:
        return "const resources = {};\n\nexport default resources;\n"

    used: set[str] = set()
    imports: list[str] = []
    props: list[str] = []
    for name in names:
        ident = _ts_identifier(name, used)
        imports.append(f"import {ident} from './{_ts_string(name)}{suffix}';\n")
        props.append(ident if ident == name else f"'{_ts_string(name)}': {ident}")

    body = ",\n  ".join(props)
    return "".join(imports) + f"\nconst resources = {{\n  {body},\n}};\n\nexport default resources;\n"


def plan_writes(tree: LocaleTree, out_dir: Path) -> list[WriteTask]:
    """List every file to write, in a stable order (locale by locale, root index last).

    Raises InvalidRowError for a locale or module name that would leave out_dir.
    """
    tasks: list[WriteTask] = []
    for locale, modules in tree.items():
        check_resource_name(locale, "locale")
        locale_dir = out_dir / locale
        for module, node in modules.items():
            check_resource_name(module, "Module")
            tasks.append(WriteTask(locale_dir / f"{module}{MODULE_SUFFIX}", render_module_json(node)))
        tasks.append(WriteTask(locale_dir / INDEX_FILE, render_index(list(modules.keys()), MODULE_SUFFIX)))
    tasks.append(WriteTask(out_dir / INDEX_FILE, render_index(list(tree.keys()))))
    return tasks


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="\n")


def write_file(task: WriteTask) -> WriteResult:
    """Write one file; OSError is turned into a failed WriteResult."""
    try:
        _write_text(task.path, task.content)
    except OSError as e:
        logger.error(f"failed to write {task.path}: {e}")
        return WriteResult(path=task.path, ok=False, error=str(e))
    logger.info(f" ✔ Imported {task.path}")
    return WriteResult(path=task.path, ok=True)


def emit_locale_tree(tree: LocaleTree, out_dir: Path, max_workers: int | None = None) -> EmitResult:
    """Write all resource and index files concurrently and wait for all of them.

    Args:
        tree: finalized LocaleTree
        out_dir: root output directory (created on demand)
        max_workers: thread pool size (None = ThreadPoolExecutor default)

    Returns:
        EmitResult with one WriteResult per planned file, in plan order
    """
    tasks = plan_writes(tree, out_dir)
    results: list[WriteResult | None] = [None] * len(tasks)

    with ThreadPoolExecutor(max_workers=max_workers) as ex, \
            ProgressTracker(len(tasks), description="Writing files") as progress:
        futures = {ex.submit(write_file, task): i for i, task in enumerate(tasks)}
        for fut in as_completed(futures):
            result = fut.result()
            results[futures[fut]] = result
            progress.advance(result.path, success=result.ok)

    return EmitResult(results=tuple(r for r in results if r is not None))
