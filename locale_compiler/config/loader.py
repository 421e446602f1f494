from __future__ import annotations

import argparse
import json
import os
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ImportConfig

"""Config loader: command-line flags on top of env, YAML file and defaults.

Precedence (lowest -> highest):
    1. built-in defaults (the values the storefront repo uses)
    2. YAML config file (--config, or .i18n/config.yml when present)
    3. environment variables I18N_* (.env is loaded by the CLI beforehand)
    4. command-line flags

Flag names are accepted in any hyphen/underscore/space/dot-separated form and
normalized to a camelCase key ("--out_dir", "--OUT-DIR" and "--out.dir" all mean
outDir). Unknown "--flag value" pairs are kept verbatim in ImportConfig.extras.
"""

__all__ = [
    "ConfigError",
    "camelize",
    "convert_list_to_array",
    "parse_argv",
    "load_config",
]

DEFAULT_SOURCE = "./.i18n/source.xlsx"
DEFAULT_OUT_DIR = "./public/locales"
DEFAULT_SHEET_NAMES = "Locale Messages"
DEFAULT_IGNORED_COLS = "Screen ID, Note, Type, Description"
DEFAULT_CONFIG_PATH = Path(".i18n/config.yml")

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

LIST_KEYS = ("sheetNames", "ignoredCols")

# camelCase key -> environment variable
ENV_VARS = {
    "source": "I18N_SOURCE",
    "outDir": "I18N_OUT_DIR",
    "sheetNames": "I18N_SHEET_NAMES",
    "ignoredCols": "I18N_IGNORED_COLS",
}

# YAML (snake_case) key -> camelCase key
FILE_KEYS = {
    "source": "source",
    "out_dir": "outDir",
    "sheet_names": "sheetNames",
    "ignored_cols": "ignoredCols",
    "assume_yes": "assumeYes",
}


class ConfigError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigError instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ConfigError(message)


def camelize(text: str) -> str:
    """Convert "out-dir" / "OUT_DIR" / "out.dir" / "out dir" to "outDir"."""
    s = re.sub(r"[-_\s.]+(.)?", lambda m: m.group(1).upper() if m.group(1) else "", text.lower())
    return s[:1].lower() + s[1:]


def _kebab(key: str) -> str:
    return re.sub(r"([A-Z])", r"-\1", key).lower()


def convert_list_to_array(names: str | Iterable[Any]) -> list[str]:
    """Split a comma list, trim every token and drop empty ones."""
    if isinstance(names, str):
        tokens: Iterable[Any] = names.split(",")
    else:
        tokens = names
    return [str(t).strip() for t in tokens if str(t).strip()]


def _normalize_flag(token: str) -> str:
    if not token.startswith("--") or len(token) == 2:
        return token
    name, sep, value = token[2:].partition("=")
    return f"--{_kebab(camelize(name))}{sep}{value}"


def _build_parser() -> _ArgumentParser:
    p = _ArgumentParser(
        prog="locale-compiler",
        description="Compile an XLSX message sheet into per-locale JSON resources",
        allow_abbrev=False,
    )
    p.add_argument("--source", help="Path to the XLSX file")
    p.add_argument("--out-dir", dest="outDir", help="Output folder")
    p.add_argument("--sheet-names", dest="sheetNames", help="Sheets to import, separated by commas")
    p.add_argument("--ignored-cols", dest="ignoredCols", help="Columns to drop, separated by commas")
    p.add_argument("--config", help=f"YAML config file (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("-y", "--yes", dest="assumeYes", action="store_true", help="Do not ask before overwriting")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p


def parse_argv(argv: list[str]) -> tuple[dict[str, Any], dict[str, str]]:
    """Parse command-line flags.

    Returns:
        (known, extras): known flags keyed by camelCase name (None when not
        given) and unknown "--flag value" pairs keyed by camelCase name.

    Raises:
        ConfigError: a flag is missing its value or a stray argument is given
    """
    normalized = [_normalize_flag(t) for t in argv]
    args, unknown = _build_parser().parse_known_args(normalized)

    extras: dict[str, str] = {}
    i = 0
    while i < len(unknown):
        token = unknown[i]
        if not token.startswith("--"):
            raise ConfigError(f"unexpected argument: {token}")
        name, sep, value = token[2:].partition("=")
        key = camelize(name)
        if not sep:
            if i + 1 >= len(unknown) or unknown[i + 1].startswith("--"):
                raise ConfigError(f"flag --{name} expects a value")
            value = unknown[i + 1]
            i += 1
        extras[key] = value
        i += 1
    return vars(args), extras


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate YAML config data against the bundled JSON schema.

    Raises:
        ConfigError: the schema file is missing/invalid or validation fails
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config_file(path: Path, required: bool = False) -> dict[str, Any]:
    """Load the optional YAML config file as camelCase values.

    A missing file is only an error when it was requested explicitly.
    """
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file must contain a mapping: {path}")

    _validate_config_schema(data)
    return {FILE_KEYS[k]: v for k, v in data.items()}


def _from_environ(environ: Mapping[str, str]) -> dict[str, str]:
    values = {}
    for key, var in ENV_VARS.items():
        value = environ.get(var)
        if value:
            values[key] = value
    return values


def load_config(argv: list[str], environ: Mapping[str, str] | None = None) -> ImportConfig:
    """Build the ImportConfig for one run.

    Args:
        argv: command-line arguments without the program name
        environ: environment mapping (defaults to os.environ)

    Raises:
        ConfigError: invalid flags, unreadable or invalid YAML config
    """
    if environ is None:
        environ = os.environ
    known, extras = parse_argv(argv)

    values: dict[str, Any] = {
        "source": DEFAULT_SOURCE,
        "outDir": DEFAULT_OUT_DIR,
        "sheetNames": DEFAULT_SHEET_NAMES,
        "ignoredCols": DEFAULT_IGNORED_COLS,
        "assumeYes": False,
    }
    if known.get("config"):
        values.update(load_config_file(Path(known["config"]), required=True))
    else:
        values.update(load_config_file(DEFAULT_CONFIG_PATH))
    values.update(_from_environ(environ))
    values.update({k: v for k, v in known.items() if k in ENV_VARS and v is not None})

    sheet_names = list(dict.fromkeys(convert_list_to_array(values["sheetNames"])))
    return ImportConfig(
        source=Path(values["source"]),
        out_dir=Path(values["outDir"]),
        sheet_names=tuple(sheet_names),
        ignored_cols=frozenset(convert_list_to_array(values["ignoredCols"])),
        assume_yes=bool(known.get("assumeYes") or values["assumeYes"]),
        debug=bool(known.get("debug")),
        extras=extras,
    )
