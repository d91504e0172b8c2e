from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from pathlib import Path

from ..logging.diagnostics import DiagnosticsSink
from ..models.config_models import OrganizationConfig
from ..models.dog import Dog
from ..models.update_record import UPDATES_HEADER, UpdateRecord
from ..tabular.file import TabularFile
from ..validation.fields import DEFAULT_STATE
from ..validation.microchip import verify_microchip
from .snapshot import RegistrySnapshot

"""Assemble the updates file from the dogs the comparison flagged."""

__all__ = [
    "UpdateCollection",
    "build_updates",
    "make_update",
]

logger = logging.getLogger(__name__)


class UpdateCollection:
    """Update records keyed by microchip, in the order they were added."""

    def __init__(self) -> None:
        self._records: dict[str, UpdateRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[UpdateRecord]:
        return iter(self._records.values())

    def find(self, microchip: str) -> UpdateRecord | None:
        return self._records.get(microchip)

    def add(self, record: UpdateRecord, subject: Dog, sink: DiagnosticsSink) -> bool:
        """Add ``record`` unless another one already has its microchip."""
        if record.microchip in self._records:
            sink.report(subject, f'duplicate microchip "{record.microchip}"')
            return False
        self._records[record.microchip] = record
        return True

    def write(self, path: Path | str) -> int:
        """Write the upload file, header first.

        Raises:
            TabularFileError: The file cannot be created
        """
        csv = TabularFile(r.to_row() for r in self._records.values())
        count = csv.write(path, UPDATES_HEADER)
        logger.info(f"Wrote {count} rows to {path}")
        return count


def make_update(
    dog: Dog,
    sink: DiagnosticsSink,
    organization: OrganizationConfig,
    today: date | None = None,
) -> UpdateRecord | None:
    """Build the update record for one dog, or None if its chip is unusable."""
    result = verify_microchip(dog.microchip)
    if not result.ok:
        sink.report(dog, f'has invalid microchip "{dog.microchip}"')
        return None
    return UpdateRecord.from_dog(dog, result.value, organization, today)


def build_updates(
    snapshot: RegistrySnapshot,
    sink: DiagnosticsSink,
    organization: OrganizationConfig | None = None,
    default_state: str = DEFAULT_STATE,
    today: date | None = None,
) -> UpdateCollection:
    """Collect an update record for every dog flagged ``update_required``.

    Each flagged dog is verified (and cleaned up) first. Verification failures
    are reported but do not keep the dog out of the file; a missing or
    invalid microchip does, since there is nothing to register.
    """
    organization = organization or OrganizationConfig()
    updates = UpdateCollection()
    for dog in snapshot:
        if not dog.update_required:
            continue
        if not dog.has_chip:
            sink.report(dog, "requires update but has no microchip!")
            continue
        dog.verify_all(sink, default_state)
        record = make_update(dog, sink, organization, today)
        if record is not None:
            updates.add(record, dog, sink)
    logger.debug(f"{len(updates)} update records built")
    return updates
