from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

"""Config dataclasses for the XLSX -> locale resource compiler.

The loader in locale_compiler.config.loader merges defaults, the optional YAML
file, environment variables and command-line flags into a single ImportConfig.
"""


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for one import run.

    Created once per run and never mutated afterwards.
    """
    source: Path  # Workbook to read
    out_dir: Path  # Root of the generated locale tree
    sheet_names: tuple[str, ...]  # Sheets to import, in request order
    ignored_cols: frozenset[str]  # Columns stripped from every row
    assume_yes: bool = False  # Skip the overwrite confirmation prompt
    debug: bool = False
    extras: dict[str, str] = field(default_factory=dict)  # 未知フラグ (camelCase key) をそのまま保持
