from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ..config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    NormalizerConfig,
    apply_env_overrides,
    default_config,
    load_config,
    load_env_file,
)
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.errors import NormalizerError
from ..services.pipeline import ProcessingError, process_all, scan_source_files
from ..services.relationships import detect
from ..services.sampler import read_sample
from ..services.summary import render_summary_line
from ..table.reader import read_table

"""CLI entrypoint.

Flow:
- Load .env, YAML config and environment overrides
- Normalize the given files (or every .csv/.xlsx in source_directory)
- Print per-file outcomes and one SUMMARY line

Exit codes: 0 all files succeeded (or none found), 2 at least one file
failed, 1 fatal (config / directory problems).
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="sheet-normalizer",
        description="Normalize messy customer spreadsheets into the 10-column canonical layout",
    )
    p.add_argument("files", nargs="*", type=Path, help="Files to process (default: every file in source_directory)")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, column analysis and relationships then exit")
    return p.parse_args(argv)


def _resolve_config(config_path: Path | None) -> NormalizerConfig:
    if config_path is not None:
        cfg = load_config(config_path)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = default_config()
    return apply_env_overrides(cfg)


def _inspect_data(cfg: NormalizerConfig, files: list[Path]) -> int:
    paths = files or scan_source_files(Path(cfg.source_directory))
    if not paths:
        print("inspect: no .csv/.xlsx files")
        return EXIT_SUCCESS_ALL
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            table = read_table(f)
            sample = read_sample(table, cfg.sample_size)
        except NormalizerError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  headers={sample.headers} total_rows={sample.total_rows}")
        for col in sample.column_analysis:
            print(f"    {col.column}: {col.data_type.value} (e.g. {col.example!r})")
        rel = detect(sample.headers, sample.sample_rows)
        print(f"  relationships={json.dumps(rel.to_dict(), ensure_ascii=False)}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no list was given, so main([]) ignores the runner's args
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    load_env_file(Path(".env"))

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    missing = [f for f in args.files if not f.exists()]
    if missing:
        logger.error(f"file not found: {', '.join(str(m) for m in missing)}")
        return EXIT_FATAL

    if args.inspect_data:
        try:
            return _inspect_data(cfg, args.files)
        except ProcessingError as e:
            logger.error(f"inspect: {e}")
            return EXIT_FATAL

    if not args.files:
        logger.info(f"Processing files from: {cfg.source_directory}")
    try:
        result = process_all(cfg, files=args.files)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
