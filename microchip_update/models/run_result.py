from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Run result model: the aggregated outcome of one comparison run.

Feeds the SUMMARY line (see microchip_update.services.summary).
"""


@dataclass(frozen=True)
class SnapshotStat:
    """Per-snapshot loading statistics."""
    file_name: str
    rows: int  # data rows in the file
    dogs: int  # dogs kept after the cutoff year
    chips: int  # of which have a microchip recorded


@dataclass(frozen=True)
class RunResult:
    """Aggregated results of comparing two snapshots."""
    old: SnapshotStat
    new: SnapshotStat
    updates: int  # rows written to the updates file
    anomalies: int  # rows written to the errors file
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    updates_path: Path | None = None
    errors_path: Path | None = None
