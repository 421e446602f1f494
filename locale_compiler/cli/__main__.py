from __future__ import annotations

import sys
from pathlib import Path

from dotenv import load_dotenv

from locale_compiler.config.loader import ConfigError, load_config
from locale_compiler.excel.reader import MissingColumnsError, SourceFileError
from locale_compiler.logging.init import enable_debug, log_summary, setup_logging
from locale_compiler.models.processing_result import ImportStatus
from locale_compiler.services.hierarchy import InvalidRowError
from locale_compiler.services.orchestrator import ConfirmFunc, run_import
from locale_compiler.services.summary import render_summary_line

"""CLI entrypoint.

    locale-compiler --source .i18n/source.xlsx --out-dir public/locales \\
        --sheet-names "Locale Messages, Server Error Messages" [--ignored-cols "Note"] [--yes]

Exit codes:
    0    completed (also when the confirmation is declined or some writes failed)
    1    configuration error
    3    source workbook missing or unreadable
    4    invalid sheet data (missing Key/Module column, empty key segment)
    130  interrupted
"""

EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_SOURCE_ERROR = 3
EXIT_DATA_ERROR = 4
EXIT_INTERRUPTED = 130


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv; variables already set in the shell win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def main(argv: list[str] | None = None, confirm_func: ConfirmFunc | None = None) -> int:
    logger = setup_logging()

    # [] はそのまま使う (None のときのみ sys.argv を読む)
    if argv is None:
        argv = sys.argv[1:]
    _load_env_file(Path(".env"))

    try:
        cfg = load_config(argv)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_CONFIG_ERROR

    if cfg.debug:
        enable_debug()
    if cfg.extras:
        logger.debug(f"unrecognized flags kept as-is: {cfg.extras}")

    try:
        result = run_import(cfg, confirm_func=confirm_func)
    except SourceFileError as e:
        logger.error(f"source: {e}")
        return EXIT_SOURCE_ERROR
    except (MissingColumnsError, InvalidRowError) as e:
        logger.error(f"data: {e}")
        return EXIT_DATA_ERROR
    except KeyboardInterrupt:
        logger.error("interrupted")
        return EXIT_INTERRUPTED

    if result.status is ImportStatus.CANCELLED:
        return EXIT_SUCCESS

    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
