from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path

from ..logging.diagnostics import DiagnosticsLog
from ..models.config_models import RunConfig
from ..models.layouts import get_layout
from ..models.run_result import RunResult, SnapshotStat
from ..tabular.file import ColumnCountError, HeaderMismatchError, TabularFileError
from .differ import compare_snapshots
from .snapshot import RegistrySnapshot
from .updates import build_updates

logger = logging.getLogger(__name__)

"""Run orchestration for the microchip update tool.

Reads the old and new Dog Information Reports, compares them, builds the
registration updates and writes both output files. Any failure that stops the
run is raised as ProcessingError; data-quality problems only ever end up in
the diagnostics log.
"""

__all__ = [
    "ProcessingError",
    "RunPaths",
    "load_snapshot",
    "run",
]


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


@dataclass(frozen=True)
class RunPaths:
    """Input and output files of one run."""
    old: Path
    new: Path
    updates: Path
    errors: Path


def load_snapshot(
    path: Path, layout_version: str, cutoff_year: int, sink: DiagnosticsLog
) -> tuple[RegistrySnapshot, SnapshotStat]:
    """Load one DIR export.

    Raises:
        ProcessingError: Unknown layout, or the file cannot be read in it
    """
    try:
        layout = get_layout(layout_version)
    except ValueError as e:
        raise ProcessingError(str(e)) from e

    snapshot = RegistrySnapshot()
    try:
        rows = snapshot.load_file(path, cutoff_year, layout, sink)
    except (HeaderMismatchError, ColumnCountError) as e:
        raise ProcessingError(f"{path}: {e}") from e
    except TabularFileError as e:
        raise ProcessingError(str(e)) from e
    stat = SnapshotStat(
        file_name=path.name,
        rows=rows,
        dogs=snapshot.dog_count,
        chips=snapshot.chip_count,
    )
    return snapshot, stat


def run(
    config: RunConfig,
    paths: RunPaths,
    sink: DiagnosticsLog | None = None,
    today: date | None = None,
) -> RunResult:
    """Compare two snapshots and write the updates and errors files.

    Args:
        config: Run configuration
        paths: Input and output files
        sink: Diagnostics collector; a new one is created if not given
        today: Service date for the update records

    Returns:
        RunResult with per-snapshot statistics and output counts

    Raises:
        ProcessingError: An input cannot be read or an output cannot be written
    """
    start_time = datetime.now(UTC)
    sink = sink if sink is not None else DiagnosticsLog()

    old, old_stat = load_snapshot(paths.old, config.old_layout, config.cutoff_year, sink)
    new, new_stat = load_snapshot(paths.new, config.new_layout, config.cutoff_year, sink)

    compare_snapshots(old, new, sink, config.organization.name)
    if config.audit_missing_microchips:
        missing = new.audit_missing_microchips(config.cutoff_year, sink)
        logger.info(f"{missing} recent dogs have no microchip")

    updates = build_updates(new, sink, config.organization, config.default_state, today)

    try:
        update_count = updates.write(paths.updates)
        anomaly_count = sink.write(paths.errors)
    except TabularFileError as e:
        raise ProcessingError(str(e)) from e

    end_time = datetime.now(UTC)
    return RunResult(
        old=old_stat,
        new=new_stat,
        updates=update_count,
        anomalies=anomaly_count,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        updates_path=paths.updates,
        errors_path=paths.errors,
    )
