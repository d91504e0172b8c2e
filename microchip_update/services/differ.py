from __future__ import annotations

import logging
from dataclasses import dataclass

from ..logging.diagnostics import DiagnosticsSink
from ..models.dog import Dog
from .snapshot import RegistrySnapshot

"""Compare two registry snapshots and decide which dogs need updating.

The old snapshot is the export taken at the last successful run, the new one
is today's. The passes run in a fixed order and each walks its snapshot in
file order, so the same pair of files always yields the same anomalies in the
same order. A pass never stops the run: anything suspicious is reported to
the sink and the comparison carries on.

Only ``Dog.update_required`` on the new snapshot's dogs is modified.
"""

__all__ = [
    "ComparisonResult",
    "compare_snapshots",
]

logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    """Counts from one comparison run."""
    acquired: int = 0
    chips_added: int = 0
    adopted: int = 0
    returned: int = 0
    anomalies: int = 0

    @property
    def transitions(self) -> int:
        return self.acquired + self.chips_added + self.adopted + self.returned


class _CountingSink:
    """Wraps a sink so the comparison can count what it reported."""

    def __init__(self, sink: DiagnosticsSink, result: ComparisonResult) -> None:
        self._sink = sink
        self._result = result

    def report(self, subject: Dog, message: str) -> None:
        self._result.anomalies += 1
        self._sink.report(subject, message)

    def info(self, message: str) -> None:
        self._sink.info(message)


# Placeholder many dogs carry instead of a disposition date
NO_DISPOSITION_DATE = "0000-00-00"

ADOPTED_STATUSES = ("Adopted", "Adoption Pending")


def _check_disappeared(old: RegistrySnapshot, new: RegistrySnapshot, sink: _CountingSink) -> None:
    # Records are never deleted, yet dogs do vanish from the export. Only the
    # ones with a registered chip matter.
    for old_dog in old:
        if new.find_number(old_dog.number) is None and old_dog.has_chip:
            sink.report(old_dog, f"has microchip {old_dog.microchip} but is not found in new dog report")


def _check_acquired_and_chipped(
    old: RegistrySnapshot, new: RegistrySnapshot, sink: _CountingSink, result: ComparisonResult
) -> None:
    for dog in new:
        if dog.is_dead() or dog.is_returned():
            continue
        old_dog = old.find_number(dog.number)
        if old_dog is None:
            sink.info(f"{dog} was acquired")
            if not dog.has_chip:
                sink.report(dog, "no microchip number recorded")
            else:
                dog.update_required = True
                result.acquired += 1
        elif not old_dog.has_chip and dog.has_chip:
            sink.info(f"{dog} microchip was added")
            dog.update_required = True
            result.chips_added += 1
        elif old_dog.microchip != dog.microchip:
            # A changed chip cannot be fixed by an update; it has to be sorted out by hand
            sink.report(dog, f'microchip number changed - was "{old_dog.microchip}" is "{dog.microchip}"')


def _check_adopted_without_adopter(new: RegistrySnapshot, sink: _CountingSink) -> None:
    for dog in new:
        if dog.status == "Adopted" and not dog.is_adopted():
            sink.report(dog, f"{dog.status} but no adopting party is recorded")


def _check_adopter_without_adoption(new: RegistrySnapshot, sink: _CountingSink) -> None:
    for dog in new:
        if not dog.is_adopted() or dog.status in ADOPTED_STATUSES:
            continue
        # Some dogs are recorded as died after being adopted; those are left alone
        if dog.is_dead() or dog.is_returned():
            continue
        sink.report(dog, f"adopting party recorded but status is {dog.status}")


def _check_disposed_but_available(new: RegistrySnapshot, sink: _CountingSink) -> None:
    for dog in new:
        if dog.disposition_date in ("", NO_DISPOSITION_DATE):
            continue
        if dog.status in ("Evaluation", "Available"):
            sink.report(dog, f"disposition date is {dog.disposition_date} but status is {dog.status}")


def _check_adoptions(
    old: RegistrySnapshot, new: RegistrySnapshot, sink: _CountingSink, result: ComparisonResult
) -> None:
    for dog in new:
        if dog.is_dead() or dog.is_returned() or not dog.is_adopted():
            continue
        old_dog = old.find_number(dog.number)
        if old_dog is not None and old_dog.is_adopted():
            if (old_dog.adoption_fname, old_dog.adoption_lname) != (dog.adoption_fname, dog.adoption_lname):
                # Reported only; the registration is not pushed again
                sink.report(old_dog, "adopting family changed")
            continue
        sink.info(f"{dog} was adopted by {dog.adoption_fname} {dog.adoption_lname}")
        dog.update_required = True
        result.adopted += 1


def _check_returns(
    old: RegistrySnapshot,
    new: RegistrySnapshot,
    sink: _CountingSink,
    result: ComparisonResult,
    organization_name: str,
) -> None:
    # The registration goes back to the rescue when an adoption falls through
    for dog in new:
        old_dog = old.find_number(dog.number)
        if old_dog is None or not old_dog.is_adopted():
            continue
        if not dog.is_adopted():
            sink.info(f"{dog} was returned to {organization_name}")
            dog.update_required = True
            result.returned += 1


def compare_snapshots(
    old: RegistrySnapshot,
    new: RegistrySnapshot,
    sink: DiagnosticsSink,
    organization_name: str = "the rescue",
) -> ComparisonResult:
    """Run every comparison pass in order.

    1. Chips in the old snapshot that are missing from the new one.
    2. Newly acquired dogs, newly chipped dogs and changed chips.
    3. "Adopted" status with no adopter recorded.
    4. An adopter recorded with a status other than adopted.
    5. Evaluation or Available dogs with a disposition date.
    6. New adoptions, and changed adopting families.
    7. Dogs returned from an adoption.

    Returns:
        Counts of the update-triggering events and the anomalies reported
    """
    result = ComparisonResult()
    counting = _CountingSink(sink, result)
    logger.info(f"Comparing {len(old)} old dogs with {len(new)} new dogs")

    _check_disappeared(old, new, counting)
    _check_acquired_and_chipped(old, new, counting, result)
    _check_adopted_without_adopter(new, counting)
    _check_adopter_without_adoption(new, counting)
    _check_disposed_but_available(new, counting)
    _check_adoptions(old, new, counting, result)
    _check_returns(old, new, counting, result, organization_name)

    logger.debug(
        f"acquired={result.acquired} chips_added={result.chips_added} "
        f"adopted={result.adopted} returned={result.returned} anomalies={result.anomalies}"
    )
    return result
