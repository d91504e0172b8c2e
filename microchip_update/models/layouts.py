from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

"""Column layouts of the Dog Information Report (DIR).

The registry web page has changed the DIR format more than once. Rather than
column constants per format, each known layout is described by the ordered
list of dog record attributes its columns map onto, plus the header line the
export carries. One generic routine (ColumnLayout.map_row) does the mapping.

History of the two layouts still in use:

- "old" (January 2021): a "Dog Breed" column after "Dog Sex"; 35 columns.
- "new" (April 2023): as above plus "County" after "Originating Area";
  36 columns.

Earlier exports also swapped the Adoption and AC name columns; a layout is
free to put any attribute in any position, so that is just another ordering.
"Micropchip" is misspelled in the export itself and must stay that way.
"""

__all__ = [
    "ColumnLayout",
    "NEW_LAYOUT",
    "OLD_LAYOUT",
    "LAYOUTS",
    "get_layout",
]

_COMMON_HEAD = (
    "name",
    "number",
    "microchip",
    "age",
    "sex",
    "breed",
    "spayed_neutered",
    "status",
    "location",
    "how_acquired",
    "date_acquired",
    "primary_contact_fname",
    "primary_contact_lname",
    "surrender_fname",
    "surrender_lname",
    "surrender_address",
    "surrender_city",
    "surrender_state",
    "surrender_zip",
    "originating_area",
)

_COMMON_TAIL = (
    "adoption_fname",
    "adoption_lname",
    "ac_fname",
    "ac_lname",
    "adoption_address",
    "adoption_city",
    "adoption_state",
    "adoption_zip",
    "adoption_area",
    "adoption_email",
    "adoption_home_phone",
    "adoption_work_phone",
    "adoption_cell_phone",
    "adoption_status",
    "disposition_date",
)

_HEADER_HEAD = (
    "Dog Name, Dog Number, Micropchip number, Dog Age, Dog Sex, Dog Breed, Dog Neuter, "
    "Dog Status, Dog Location, How Acquired, Date Acquired, Primary Contact Fname, "
    "Primary Contact Lname, Surrender Fname, Surrender Lname, Surrender Address, "
    "Surrender City, Surrender State, Surrender Zip Code, Originating Area, "
)

_HEADER_TAIL = (
    "Adoption Fname, Adoption Lname, AC Fname, AC Lname, Adoption Address, Adoption City, "
    "Adoption State, Adoption Zip Code, Adoption Area, Adoption Email, Adoption Home Phone, "
    "Adoption Work Phone, Adoption Cell Phone, Adoption Status, Adoption or Disposition Date"
)


@dataclass(frozen=True)
class ColumnLayout:
    """One version of the DIR column layout.

    Attributes:
        version: Short name used in configuration ("old" or "new")
        header: Literal header line the export must start with
        fields: Dog record attribute for each column, in column order
    """
    version: str
    header: str
    fields: tuple[str, ...]

    @property
    def columns(self) -> int:
        return len(self.fields)

    def map_row(self, row: Sequence[str]) -> dict[str, str]:
        """Map the columns of one row onto dog record attribute names.

        Raises:
            ValueError: The row does not have exactly one value per column
        """
        if len(row) != len(self.fields):
            raise ValueError(
                f"{self.version} layout expects {len(self.fields)} columns, got {len(row)}"
            )
        return dict(zip(self.fields, row))


OLD_LAYOUT = ColumnLayout(
    version="old",
    header=_HEADER_HEAD + _HEADER_TAIL,
    fields=_COMMON_HEAD + _COMMON_TAIL,
)

NEW_LAYOUT = ColumnLayout(
    version="new",
    header=_HEADER_HEAD + "County, " + _HEADER_TAIL,
    fields=_COMMON_HEAD + ("county",) + _COMMON_TAIL,
)

LAYOUTS: dict[str, ColumnLayout] = {
    OLD_LAYOUT.version: OLD_LAYOUT,
    NEW_LAYOUT.version: NEW_LAYOUT,
}


def get_layout(version: str) -> ColumnLayout:
    """Return the layout for ``version`` ("old" or "new")."""
    try:
        return LAYOUTS[version]
    except KeyError:
        raise ValueError(f"unknown DIR layout {version!r}") from None
