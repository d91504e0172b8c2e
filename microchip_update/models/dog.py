from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from ..tabular.row import TabularRow
from ..validation.fields import (
    DEFAULT_STATE,
    ValidationResult,
    format_date,
    parse_age,
    parse_date,
    verify_email,
    verify_phone,
    verify_sex,
    verify_spay_neuter,
    verify_state,
    verify_zip,
)
from .layouts import ColumnLayout

if TYPE_CHECKING:
    from ..logging.diagnostics import DiagnosticsSink

"""Dog record built from one row of the Dog Information Report.

The registry number is the only value stored as a number and the only one
validated on the way in; it and the microchip are the lookup keys and cannot
change once the record exists. Every other field is kept as whatever text the
export contained. Dog names are definitely not unique.
"""

__all__ = [
    "Dog",
    "MAX_DOG_NUMBER",
    "RejectedRow",
    "responsible_person",
]

# Largest possible registry number
MAX_DOG_NUMBER = 99999

_KEY_FIELDS = frozenset({"number", "microchip"})
_NUMBER_RE = re.compile(r"[0-9]+")


def responsible_person(values: Mapping[str, Any]) -> str:
    """Work out which volunteer is responsible for a dog.

    The primary contact is preferred, then the area coordinator (A/C). With
    neither recorded, the dog's location (or failing that its originating
    area) is the best available stand-in.
    """
    primary = f"{values.get('primary_contact_fname', '')} {values.get('primary_contact_lname', '')}".strip()
    if primary:
        return primary
    coordinator = f"{values.get('ac_fname', '')} {values.get('ac_lname', '')}".strip()
    if coordinator:
        return coordinator
    if values.get("location"):
        return str(values["location"])
    return str(values.get("originating_area", ""))


@dataclass(frozen=True)
class RejectedRow:
    """Identity of a DIR row that could not become a Dog (bad registry number)."""
    name: str
    number: str
    responsible_person: str


@dataclass(eq=False)
class Dog:
    """A single dog's registry data.

    ``update_required`` is set by the snapshot comparison when the dog's
    registration must be pushed to the microchip service. ``corrections``
    keeps the original text of every field that verification replaced.
    """
    number: int
    name: str = ""
    microchip: str = ""
    age: str = ""
    sex: str = ""
    breed: str = ""
    spayed_neutered: str = ""
    status: str = ""
    location: str = ""
    how_acquired: str = ""
    date_acquired: str = ""
    primary_contact_fname: str = ""
    primary_contact_lname: str = ""
    surrender_fname: str = ""
    surrender_lname: str = ""
    surrender_address: str = ""
    surrender_city: str = ""
    surrender_state: str = ""
    surrender_zip: str = ""
    originating_area: str = ""
    county: str = ""
    adoption_fname: str = ""
    adoption_lname: str = ""
    ac_fname: str = ""
    ac_lname: str = ""
    adoption_address: str = ""
    adoption_city: str = ""
    adoption_state: str = ""
    adoption_zip: str = ""
    adoption_area: str = ""
    adoption_email: str = ""
    adoption_home_phone: str = ""
    adoption_work_phone: str = ""
    adoption_cell_phone: str = ""
    adoption_status: str = ""
    disposition_date: str = ""
    update_required: bool = False
    corrections: dict[str, str] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not 1 <= self.number <= MAX_DOG_NUMBER:
            raise ValueError(f"invalid dog number {self.number}")
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _KEY_FIELDS and getattr(self, "_sealed", False):
            raise AttributeError(f"{name} is a lookup key and cannot be changed")
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return f"dog {self.name} #{self.number}"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_row(
        cls, row: TabularRow, layout: ColumnLayout, sink: DiagnosticsSink
    ) -> Dog | None:
        """Build a dog from one DIR row laid out as ``layout``.

        "None" (any case) in the microchip column means no chip. The registry
        number must be a whole number from 1 to MAX_DOG_NUMBER; if it is not,
        the problem is reported and None is returned. Nothing else is checked
        here: the database is full of junk and only dogs that need
        registering are verified (see verify_all).
        """
        values = layout.map_row(row)
        raw_number = values.pop("number")
        if values.get("microchip", "").lower() == "none":
            values["microchip"] = ""

        problem = None
        if not _NUMBER_RE.fullmatch(raw_number):
            problem = f"invalid dog number {raw_number}"
        elif not 1 <= int(raw_number) <= MAX_DOG_NUMBER:
            problem = f"invalid dog number {int(raw_number)}"
        if problem is not None:
            subject = RejectedRow(
                name=values.get("name", ""),
                number=raw_number,
                responsible_person=responsible_person(values),
            )
            sink.report(subject, problem)
            return None

        known = {f.name for f in fields(cls)}
        return cls(number=int(raw_number), **{k: v for k, v in values.items() if k in known})

    # ------------------------------------------------------------------
    # Status tests. The database is none too accurate, so beware.
    # ------------------------------------------------------------------
    @property
    def has_chip(self) -> bool:
        return self.microchip != ""

    @property
    def responsible_person(self) -> str:
        return responsible_person(self.__dict__)

    @property
    def adopter_name(self) -> str:
        return f"{self.adoption_fname} {self.adoption_lname}".strip()

    def is_adopted(self) -> bool:
        """A dog is adopted when an adopter first or last name is recorded.

        The status text ("Adopted", "Adoption Pending") is not used; it is not
        reliable in the registry.
        """
        return self.adoption_fname != "" or self.adoption_lname != ""

    def is_euthanized(self) -> bool:
        return "Euthanized" in self.status

    def has_died(self) -> bool:
        return "Died" in self.status

    def is_dead(self) -> bool:
        return self.is_euthanized() or self.has_died()

    def is_returned(self) -> bool:
        return "Returned" in self.status

    def acquisition_date(self) -> tuple[int, int, int] | None:
        return parse_date(self.date_acquired)

    def disposition(self) -> tuple[int, int, int] | None:
        return parse_date(self.disposition_date)

    def was_acquired_after(self, year: int, sink: DiagnosticsSink) -> bool:
        """True if the dog was acquired in ``year`` or later.

        A dog without a usable acquisition date is reported and treated as
        recent, so it is never silently dropped.
        """
        acquired = self.acquisition_date()
        if acquired is None:
            sink.report(self, "no acquisition date recorded")
            return True
        return acquired[0] >= year

    def compute_date_of_birth(self) -> str | None:
        """Compute the date of birth as MM/DD/YYYY, or None if unknown.

        The DIR only records the dog's age ("3 Years 2 Months") as of the date
        it was acquired, so the birth date is that date minus the age. The day
        of the month is the acquisition day; there is no finer resolution.
        """
        if self.date_acquired == "" or self.age == "":
            return None
        age = parse_age(self.age)
        if age is None:
            return None
        acquired = self.acquisition_date()
        if acquired is None:
            return None
        years, months = age
        year, month, day = acquired
        year -= years
        month -= months
        if month < 1:
            year -= 1
            month += 12
        return format_date(year, month, day)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def _apply(
        self,
        attr: str,
        result: ValidationResult,
        sink: DiagnosticsSink,
        quiet: bool = False,
    ) -> bool:
        """Adopt a validator's value for ``attr`` and report its problem."""
        current = getattr(self, attr)
        if result.value != current:
            self.corrections.setdefault(attr, current)
            setattr(self, attr, result.value)
        if not result.ok and not quiet and result.problem:
            sink.report(self, result.problem)
        return result.ok

    def verify_home_phone(self, sink: DiagnosticsSink, quiet: bool = False) -> bool:
        return self._apply("adoption_home_phone", verify_phone(self.adoption_home_phone, "home"), sink, quiet)

    def verify_cell_phone(self, sink: DiagnosticsSink, quiet: bool = False) -> bool:
        return self._apply("adoption_cell_phone", verify_phone(self.adoption_cell_phone, "cell"), sink, quiet)

    def verify_work_phone(self, sink: DiagnosticsSink, quiet: bool = False) -> bool:
        return self._apply("adoption_work_phone", verify_phone(self.adoption_work_phone, "work"), sink, quiet)

    def verify_adoption_zip(self, sink: DiagnosticsSink) -> bool:
        return self._apply("adoption_zip", verify_zip(self.adoption_zip), sink)

    def verify_adoption_email(self, sink: DiagnosticsSink) -> bool:
        return self._apply("adoption_email", verify_email(self.adoption_email), sink)

    def verify_adoption_state(self, sink: DiagnosticsSink, default: str = DEFAULT_STATE) -> bool:
        return self._apply("adoption_state", verify_state(self.adoption_state, default), sink)

    def verify_sex(self, sink: DiagnosticsSink) -> bool:
        return self._apply("sex", verify_sex(self.sex), sink)

    def verify_spay_neuter(self, sink: DiagnosticsSink) -> bool:
        return self._apply("spayed_neutered", verify_spay_neuter(self.spayed_neutered), sink)

    def adoption_fields_blank(self) -> bool:
        return not any(
            (
                self.adoption_email,
                self.adoption_fname,
                self.adoption_lname,
                self.adoption_cell_phone,
                self.adoption_home_phone,
                self.adoption_work_phone,
                self.adoption_address,
                self.adoption_state,
                self.adoption_zip,
            )
        )

    def verify_all(self, sink: DiagnosticsSink, default_state: str = DEFAULT_STATE) -> bool:
        """Verify (and where possible fix) everything needed for registration.

        Sex and spay/neuter are checked for every dog, and a date of birth must
        be computable. If an adopter name is recorded the adopter's email, home
        phone, zip and state must be valid (cell and work phones are cleaned up
        but not reported); if not, every adoption field must be blank.

        Returns:
            True only if every check passed. Callers use this as a health
            signal, not as a gate.
        """
        ok = True
        ok &= self.verify_sex(sink)
        ok &= self.verify_spay_neuter(sink)

        if self.compute_date_of_birth() is None:
            sink.report(self, "has no valid DOB")
            ok = False

        if self.is_adopted():
            ok &= self.verify_adoption_email(sink)
            ok &= self.verify_home_phone(sink)
            self.verify_cell_phone(sink, quiet=True)
            self.verify_work_phone(sink, quiet=True)
            ok &= self.verify_adoption_zip(sink)
            ok &= self.verify_adoption_state(sink, default_state)
        else:
            blank = self.adoption_fields_blank()
            if not blank:
                sink.report(self, "adoption information should be blank")
            ok &= blank
        return ok
