from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

"""Sheet-level models: header classification and normalized rows.

A sheet header is classified once into Key / Module / ignored / locale columns
(SheetSchema). Every data row after the note row is then turned into a SheetRow
carrying only the locale messages that are actually filled in.
"""

__all__ = [
    "KEY_COLUMN",
    "MODULE_COLUMN",
    "LocaleTree",
    "MessageNode",
    "SheetRow",
    "SheetSchema",
]

KEY_COLUMN = "Key"
MODULE_COLUMN = "Module"

# leaf (message text) or nested mapping keyed by key segment
MessageNode = Union[str, dict[str, "MessageNode"]]
# locale -> module -> message tree
LocaleTree = dict[str, dict[str, MessageNode]]


@dataclass(frozen=True)
class SheetSchema:
    """Classification of a sheet's header row.

    columns holds the de-duplicated header names in sheet order; every name is
    in exactly one of key/module/locale_columns/ignored_columns. Blank header
    cells are kept as "" and classified as ignored.
    """
    sheet_name: str
    columns: tuple[str, ...]
    locale_columns: tuple[str, ...]
    ignored_columns: tuple[str, ...]
    has_key: bool = True
    has_module: bool = True

    @property
    def missing_columns(self) -> list[str]:
        missing = []
        if not self.has_key:
            missing.append(KEY_COLUMN)
        if not self.has_module:
            missing.append(MODULE_COLUMN)
        return missing


@dataclass(frozen=True)
class SheetRow:
    """One data row of a sheet after the note row has been dropped.

    row_number is the 1-based Excel row number (header = row 1) and is only used
    for diagnostics. messages maps locale -> message text; blank cells are absent.
    """
    sheet_name: str
    row_number: int
    key: str
    module: str
    messages: dict[str, str] = field(default_factory=dict)

    @property
    def location(self) -> str:
        return f"sheet '{self.sheet_name}' row {self.row_number}"
