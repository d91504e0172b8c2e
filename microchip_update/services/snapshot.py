from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..logging.diagnostics import DiagnosticsSink
from ..models.dog import Dog
from ..models.layouts import ColumnLayout
from ..tabular.file import TabularFile
from ..tabular.row import TabularRow
from .progress import ProgressTracker

"""Registry snapshot: every dog from one Dog Information Report.

Dogs are kept in a single list (the arena) in file order, with two indexes
into it: by registry number, which covers every dog, and by microchip, which
only covers dogs with a chip recorded. Both indexes always resolve a key to
the same record. Iteration is in file order, which keeps the comparison and
its diagnostics reproducible.
"""

__all__ = [
    "RegistrySnapshot",
]

logger = logging.getLogger(__name__)


class RegistrySnapshot:
    """Collection of Dog records indexed by registry number and microchip."""

    def __init__(self) -> None:
        self._dogs: list[Dog] = []
        self._by_number: dict[int, int] = {}
        self._by_chip: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._dogs)

    def __iter__(self) -> Iterator[Dog]:
        return iter(self._dogs)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (int, str)):
            return self.find(key) is not None
        return False

    @property
    def dog_count(self) -> int:
        return len(self._by_number)

    @property
    def chip_count(self) -> int:
        return len(self._by_chip)

    def chipped(self) -> Iterator[Dog]:
        """Dogs with a microchip recorded, in file order."""
        return (d for d in self._dogs if d.has_chip)

    def find(self, key: int | str) -> Dog | None:
        """Find a dog by registry number (int) or microchip (str).

        Returns None when there is no such dog. Remember that a dog found by
        number does not necessarily have a chip.
        """
        if isinstance(key, str):
            return self.find_chip(key)
        return self.find_number(key)

    def find_number(self, number: int) -> Dog | None:
        index = self._by_number.get(number)
        return None if index is None else self._dogs[index]

    def find_chip(self, chip: str) -> Dog | None:
        index = self._by_chip.get(chip)
        return None if index is None else self._dogs[index]

    def add(self, dog: Dog, sink: DiagnosticsSink) -> bool:
        """Add a dog, rejecting duplicate registry numbers and microchips.

        Volunteers do occasionally enter the same chip for two dogs, so both
        keys are checked before the dog goes into either index. A rejected dog
        is reported and left out; the run carries on.
        """
        if dog.number in self._by_number:
            sink.report(dog, "already in collection")
            return False
        if dog.has_chip:
            other = self.find_chip(dog.microchip)
            if other is not None:
                sink.report(dog, f"and {other.name} #{other.number} have the same microchip")
                return False

        index = len(self._dogs)
        self._dogs.append(dog)
        self._by_number[dog.number] = index
        if dog.has_chip:
            self._by_chip[dog.microchip] = index
        return True

    def load_rows(
        self,
        rows: Sequence[TabularRow],
        cutoff_year: int,
        layout: ColumnLayout,
        sink: DiagnosticsSink,
    ) -> int:
        """Turn DIR rows into dogs and add the recent ones.

        Rows with an unusable registry number are dropped (and reported by
        Dog.from_row). Dogs acquired before ``cutoff_year`` are dropped too:
        the export goes back to the beginning of time and the old dogs are of
        no interest.

        Returns:
            Number of dogs added
        """
        added = 0
        with ProgressTracker(len(rows)) as progress:
            for row in rows:
                progress.advance()
                dog = Dog.from_row(row, layout, sink)
                if dog is None:
                    continue
                if dog.was_acquired_after(cutoff_year, sink) and self.add(dog, sink):
                    added += 1
        return added

    def load_file(
        self,
        path: Path | str,
        cutoff_year: int,
        layout: ColumnLayout,
        sink: DiagnosticsSink,
    ) -> int:
        """Read a DIR export in ``layout`` and load it.

        Returns:
            Number of data rows in the file

        Raises:
            TabularFileError: The file is unreadable, has the wrong header, or
                a row has the wrong number of columns
        """
        csv = TabularFile()
        rows = csv.read(path, layout.header)
        logger.info(f"Read {rows} rows from {path}")
        self.load_rows(list(csv), cutoff_year, layout, sink)
        logger.info(f"{self.dog_count} dogs, {self.chip_count} chips loaded from {path}")
        return rows

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        cutoff_year: int,
        layout: ColumnLayout,
        sink: DiagnosticsSink,
    ) -> RegistrySnapshot:
        snapshot = cls()
        snapshot.load_file(path, cutoff_year, layout, sink)
        return snapshot

    def audit_missing_microchips(self, year: int, sink: DiagnosticsSink) -> int:
        """Report dogs acquired in ``year`` or later that have no chip.

        Every new dog is supposed to be chipped, but coordinators forget.
        Dead and returned dogs are ignored.

        Returns:
            Number of dogs reported
        """
        missing = 0
        for dog in self._dogs:
            if dog.is_dead() or dog.is_returned():
                continue
            if not dog.has_chip and dog.was_acquired_after(year, sink):
                sink.report(dog, "should have a microchip!!")
                missing += 1
        return missing
