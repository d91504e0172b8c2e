from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from dotenv import load_dotenv

from microchip_update.config.loader import ConfigError, resolve_config
from microchip_update.logging.init import log_summary, set_debug, setup_logging
from microchip_update.models.config_models import RunConfig
from microchip_update.services.orchestrator import ProcessingError, RunPaths, run
from microchip_update.services.summary import render_summary_line

"""CLI entrypoint.

    microchip-update [-c YEAR] [-o[1|2]] [--config PATH] [--debug]
                     OLD NEW [UPDATES [ERRORS]]

Reads the previous and the current Dog Information Report, compares them,
and writes a microchip update file ready for upload plus an error report
for the volunteers.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_USAGE = 2

DEFAULT_EXTENSION = ".csv"
DEFAULT_UPDATES_FILE = "updates"
DEFAULT_ERRORS_FILE = "errors"

MIN_CUTOFF_YEAR = 2010
MAX_CUTOFF_YEAR = 2050


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; a missing file is fine."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def apply_default_extension(name: str, extension: str = DEFAULT_EXTENSION) -> Path:
    """Append ``extension`` to a file name that has none."""
    path = Path(name)
    if path.suffix == "":
        path = path.with_name(path.name + extension)
    return path


def _cutoff_year(value: str) -> int:
    try:
        year = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid cutoff year: {value}") from None
    if not MIN_CUTOFF_YEAR <= year <= MAX_CUTOFF_YEAR:
        raise argparse.ArgumentTypeError(
            f"cutoff year must be between {MIN_CUTOFF_YEAR} and {MAX_CUTOFF_YEAR}"
        )
    return year


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="microchip-update",
        description="Build a microchip registration update file from two Dog Information Reports",
    )
    p.add_argument("-c", "--cutoff", type=_cutoff_year, metavar="YEAR", help="ignore dogs acquired before YEAR")
    p.add_argument(
        "-o",
        "-o1",
        dest="old_format",
        action="store_const",
        const=1,
        help="the old DIR is in the old format",
    )
    p.add_argument("-o2", dest="old_format", action="store_const", const=2, help="BOTH DIRs are in the old format")
    p.add_argument("--config", type=Path, help="YAML run configuration")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("old", help="the previous Dog Information Report .csv file")
    p.add_argument("new", help="the current Dog Information Report .csv file")
    p.add_argument("updates", nargs="?", default=DEFAULT_UPDATES_FILE, help="microchip update .csv file to write")
    p.add_argument("errors", nargs="?", default=DEFAULT_ERRORS_FILE, help="error report .csv file to write")
    return p.parse_args(argv)


def _apply_overrides(cfg: RunConfig, args: argparse.Namespace) -> RunConfig:
    changes: dict[str, object] = {}
    if args.cutoff is not None:
        changes["cutoff_year"] = args.cutoff
    if args.old_format is not None:
        changes["old_layout"] = "old"
        if args.old_format == 2:
            changes["new_layout"] = "old"
    return dataclasses.replace(cfg, **changes) if changes else cfg


def main(argv: list[str] | None = None) -> int:
    # Initialize logging system with labeled prefixes
    logger = setup_logging()

    # None means "read sys.argv"; an empty list is a real (empty) command line
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = _parse_args(argv)
    except SystemExit as e:
        return EXIT_SUCCESS if e.code == 0 else EXIT_USAGE

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = _apply_overrides(resolve_config(args.config), args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    paths = RunPaths(
        old=apply_default_extension(args.old),
        new=apply_default_extension(args.new),
        updates=apply_default_extension(args.updates),
        errors=apply_default_extension(args.errors),
    )
    logger.debug(f"cutoff_year={cfg.cutoff_year} old_layout={cfg.old_layout} new_layout={cfg.new_layout}")

    try:
        result = run(cfg, paths)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    # Anomalies are the normal output of a run, not a failure
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
