from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import TYPE_CHECKING

from ..tabular.row import TabularRow

if TYPE_CHECKING:
    from ..logging.diagnostics import DiagnosticSubject

"""DiagnosticRecord model: one row of the errors CSV.

Each record names the dog, its registry number and the volunteer responsible
for it, so the errors file can be sorted and handed out to the people who can
fix the registry entries.
"""

__all__ = [
    "DIAGNOSTICS_HEADER",
    "DiagnosticRecord",
]

DIAGNOSTICS_HEADER = "Name,Number,Contact Member,Error"


@dataclass(frozen=True)
class DiagnosticRecord:
    """One data-quality anomaly.

    Attributes:
        name: Dog name
        number: Registry number as text (rejected rows keep the raw value)
        contact: Responsible volunteer (see Dog.responsible_person)
        message: What looks wrong
    """
    name: str
    number: str
    contact: str
    message: str

    @staticmethod
    def create(subject: DiagnosticSubject, message: str) -> DiagnosticRecord:
        """Create a record for ``subject`` (a Dog or a RejectedRow)."""
        return DiagnosticRecord(
            name=subject.name,
            number=str(subject.number),
            contact=subject.responsible_person,
            message=message,
        )

    def to_row(self) -> TabularRow:
        return TabularRow(astuple(self))

    def to_log_line(self) -> str:
        return f"dog {self.name} #{self.number} contact {self.contact} - {self.message}"
