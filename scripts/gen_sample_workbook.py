#!/usr/bin/env python3
"""Generate a synthetic message workbook for manual runs and performance checks.

The generated sheets follow the layout the compiler expects:
- Row 1: Header row (Screen ID, Key, Module, <locales>..., Note)
- Row 2: Note row for translators (discarded by the compiler)
- Row 3+: Message rows
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

WORDS = ["title", "label", "button", "error", "hint", "placeholder", "message", "description"]
SECTIONS = ["header", "footer", "form", "dialog", "table", "menu"]


def generate_messages(rows: int, locales: list[str], modules: list[str], seed: int = 42) -> pd.DataFrame:
    """Generate message rows with unique "section.word_n" keys per module."""
    rng = np.random.default_rng(seed)

    data: dict[str, list[str]] = {
        "Screen ID": [f"SCR{rng.integers(100, 999)}" for _ in range(rows)],
        "Key": [],
        "Module": [],
    }
    for j in range(rows):
        section = SECTIONS[j % len(SECTIONS)]
        word = WORDS[rng.integers(0, len(WORDS))]
        data["Key"].append(f"{section}.{word}_{j}")
        data["Module"].append(modules[j % len(modules)])
    for locale in locales:
        data[locale] = [f"[{locale}] message {j + 1}" for j in range(rows)]
    data["Note"] = ["" for _ in range(rows)]
    return pd.DataFrame(data)


def create_workbook(
    output_path: Path,
    rows: int,
    locales: list[str],
    modules: list[str],
    sheets: list[str] | None = None,
    seed: int = 42,
) -> None:
    if sheets is None:
        sheets = ["Locale Messages"]

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for i, sheet_name in enumerate(sheets):
            df = generate_messages(rows, locales, modules, seed + i)
            # キーがシート間で衝突しないようにシート番号を付与
            df["Key"] = [f"s{i}.{k}" for k in df["Key"]]

            sheet_data = [df.columns.tolist()]
            sheet_data.append(["(note) do not edit the Key column"] + [""] * (len(df.columns) - 1))
            for _, row in df.iterrows():
                sheet_data.append(row.tolist())

            pd.DataFrame(sheet_data).to_excel(writer, sheet_name=sheet_name, header=False, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Sheets: {len(sheets)} ({', '.join(sheets)})")
    print(f"  Rows per sheet: {rows} (+ header and note rows)")
    print(f"  Locales: {', '.join(locales)}")
    print(f"  Modules: {', '.join(modules)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic XLSX message workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s .i18n/source.xlsx
  %(prog)s big.xlsx --rows 20000 --locales en ja vi --modules common errors login
        """,
    )
    parser.add_argument("output", type=Path, help="Output XLSX path")
    parser.add_argument("--rows", type=int, default=1_000, help="Message rows per sheet (default: 1,000)")
    parser.add_argument("--locales", nargs="+", default=["en", "ja"], help="Locale columns (default: en ja)")
    parser.add_argument("--modules", nargs="+", default=["common", "errors"], help="Module names (default: common errors)")
    parser.add_argument("--sheets", nargs="+", default=["Locale Messages"], help="Sheet names")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1

    try:
        create_workbook(args.output, args.rows, args.locales, args.modules, args.sheets, args.seed)
    except OSError as e:
        print(f"Error generating workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
