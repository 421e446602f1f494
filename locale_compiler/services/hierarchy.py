from __future__ import annotations

import logging
import re
from enum import Enum
from typing import cast

from ..models.sheet_row import LocaleTree, MessageNode, SheetRow

"""Hierarchy builder: folds sheet rows into the per-locale/per-module tree.

A row with Key "auth.login.title", Module "common" and an "en" message
"Sign in" ends up as

    tree["en"]["common"] == {"auth": {"login": {"title": "Sign in"}}}

Conflict policy is "first leaf wins": once a path ends in a message, later rows
can neither replace it nor nest below it, and an existing mapping is never
replaced by a message. Such inserts are reported as BLOCKED and logged.
"""

__all__ = [
    "InsertOutcome",
    "InvalidRowError",
    "LocaleTreeBuilder",
    "check_resource_name",
    "split_key_path",
]

logger = logging.getLogger(__name__)


class InvalidRowError(Exception):
    """Raised when a row cannot be placed in the tree (empty Key/Module/segment)."""

    def __init__(self, message: str, location: str | None = None) -> None:
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


class InsertOutcome(Enum):
    INSERTED = "inserted"
    BLOCKED = "blocked"


_UNSAFE_NAME_CHARS = re.compile(r"[/\\'\x00-\x1f]")


def check_resource_name(name: str, kind: str) -> None:
    """Module and locale names become file and directory names under out_dir."""
    if name in (".", "..") or _UNSAFE_NAME_CHARS.search(name):
        raise InvalidRowError(f"{kind} '{name}' cannot be used as a file name")


def split_key_path(key: str) -> list[str]:
    """Split a dot-separated key into segments, rejecting empty segments."""
    if not key:
        raise InvalidRowError("empty Key")
    segments = key.split(".")
    if any(s == "" for s in segments):
        raise InvalidRowError(f"empty segment in Key '{key}'")
    return segments


class LocaleTreeBuilder:
    """Accumulator for the LocaleTree of one run.

    Rows are inserted strictly sequentially; finalize() hands the tree over and
    closes the builder for further inserts.
    """

    def __init__(self) -> None:
        self._tree: LocaleTree = {}
        self._finalized = False
        self.blocked = 0

    @property
    def locales(self) -> list[str]:
        return list(self._tree.keys())

    def insert(self, locale: str, module: str, key_path: list[str], value: str) -> InsertOutcome:
        """Insert one message at key_path under tree[locale][module]."""
        if self._finalized:
            raise RuntimeError("builder already finalized")
        if not key_path:
            raise InvalidRowError("empty key path")
        check_resource_name(locale, "locale")
        check_resource_name(module, "Module")

        module_root = self._tree.setdefault(locale, {}).setdefault(module, {})
        node = cast(dict[str, MessageNode], module_root)
        *parents, last = key_path
        for segment in parents:
            child = node.get(segment)
            if child is None:
                child = node[segment] = {}
            elif not isinstance(child, dict):
                # 既存 leaf の下には書き込まない
                return InsertOutcome.BLOCKED
            node = child

        if last in node:
            return InsertOutcome.BLOCKED
        node[last] = value
        return InsertOutcome.INSERTED

    def add_row(self, row: SheetRow) -> int:
        """Insert every locale message of a row. Returns the number of blocked inserts.

        Raises:
            InvalidRowError: empty Module, empty Key, empty key segment or a
                Module/locale name that is not a plain file name
        """
        if not row.module:
            raise InvalidRowError("empty Module", row.location)
        try:
            check_resource_name(row.module, "Module")
            for locale in row.messages:
                check_resource_name(locale, "locale")
            key_path = split_key_path(row.key)
        except InvalidRowError as e:
            raise InvalidRowError(str(e), row.location) from e

        blocked = 0
        for locale, message in row.messages.items():
            outcome = self.insert(locale, row.module, key_path, message)
            if outcome is InsertOutcome.BLOCKED:
                blocked += 1
                logger.warning(
                    f"{row.location}: '{row.module}.{row.key}' ({locale}) conflicts with an existing entry, kept the first one"
                )
        self.blocked += blocked
        return blocked

    def finalize(self) -> LocaleTree:
        self._finalized = True
        return self._tree
