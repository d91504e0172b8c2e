from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from ..models.diagnostic_record import DIAGNOSTICS_HEADER, DiagnosticRecord
from ..tabular.file import TabularFile

"""Diagnostics collection for data-quality anomalies.

Anything that looks wrong in the registry (a bad field, a suspicious
transition between snapshots, a duplicate key) is reported to a
DiagnosticsSink together with the dog it concerns. The run never stops for
these; they end up in the errors CSV for volunteers to fix by hand.

The sink is passed explicitly to every component that can find a problem.
"""

__all__ = [
    "DiagnosticSubject",
    "DiagnosticsLog",
    "DiagnosticsSink",
]

logger = logging.getLogger(__name__)


class DiagnosticSubject(Protocol):
    """What a diagnostic needs to know about the dog it concerns."""

    @property
    def name(self) -> str: ...

    @property
    def number(self) -> int | str: ...

    @property
    def responsible_person(self) -> str: ...


class DiagnosticsSink(Protocol):
    """Receiver of anomalies and informational messages."""

    def report(self, subject: DiagnosticSubject, message: str) -> None: ...

    def info(self, message: str) -> None: ...


class DiagnosticsLog:
    """In-memory, append-ordered diagnostics buffer. write() emits the CSV.

    Each anomaly is also logged at WARN as it happens; informational messages
    only go to the log.
    """

    def __init__(self) -> None:
        self._records: list[DiagnosticRecord] = []

    def report(self, subject: DiagnosticSubject, message: str) -> None:
        record = DiagnosticRecord.create(subject, message)
        logger.warning(record.to_log_line())
        self._records.append(record)

    def info(self, message: str) -> None:
        logger.info(message)

    def append(self, record: DiagnosticRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> list[DiagnosticRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DiagnosticRecord]:
        return iter(self._records)

    def write(self, path: Path) -> int:
        """Write every anomaly, in the order reported, to a CSV file.

        Returns:
            Number of anomalies written

        Raises:
            TabularFileError: The file cannot be created
        """
        csv = TabularFile(r.to_row() for r in self._records)
        count = csv.write(path, DIAGNOSTICS_HEADER)
        logger.info(f"Wrote {count} bad dogs to {path}")
        return count
