from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from hr_audit.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from hr_audit.logging.init import log_summary, set_level, setup_logging
from hr_audit.services.orchestrator import AuditError, process_workbook
from hr_audit.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (may set HR_AUDIT_CONFIG)
- Load and validate the YAML config
- Read workbook, run the audit, write the JSON batches
- Print the SUMMARY line

Exit codes: 0 when the run completed, 1 on any fatal error (nothing written).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

CONFIG_ENV_VAR = "HR_AUDIT_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a missing file is fine."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Employee record data-quality audit")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--output", type=Path, default=None, help="Override output_path from the config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print resolved headers & first rows then exit")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_value = os.getenv(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_CONFIG_PATH


def _inspect_data(cfg) -> int:
    from hr_audit.excel.reader import SheetHeaderError, read_workbook, sheet_to_table
    from hr_audit.services.normalizer import normalize_headers

    src = cfg.source
    path = Path(src.workbook)
    if not path.exists():
        print(f"inspect: workbook not found: {path}")
        return EXIT_FATAL
    sheets = read_workbook(path, target_sheets={src.data_sheet})
    if src.data_sheet not in sheets:
        print(f"inspect: sheet '{src.data_sheet}' not found in {path.name}")
        return EXIT_FATAL
    try:
        table = sheet_to_table(sheets[src.data_sheet], src.data_sheet, src.header_row)
    except SheetHeaderError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    headers = normalize_headers(table.header, table.columns(), cfg.engine.rename_sentinels)
    print(f"FILE: {path.name}")
    print(f"  SHEET: {table.sheet_name} raw_cols={table.header}")
    print(f"  resolved_cols={headers}")
    sample = [dict(zip(headers, row)) for row in table.rows[:3]]
    print("    sample_rows=", sample)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # An explicit empty list means "no arguments"; only None reads sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_level("DEBUG")
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Auditing workbook: {cfg.source.workbook}")
    try:
        result = process_workbook(cfg, output_path=args.output)
    except AuditError as e:
        logger.error(f"audit: {e}")
        return EXIT_FATAL

    if result.anomaly_log_path:
        logger.info(f"anomalies logged to {result.anomaly_log_path}")
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
