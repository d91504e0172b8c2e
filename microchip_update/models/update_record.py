from __future__ import annotations

from dataclasses import astuple, dataclass
from datetime import date

from ..tabular.row import TabularRow
from .config_models import OrganizationConfig
from .dog import Dog

"""UpdateRecord: one registration row for the microchip service.

The layout is the one the service's bulk upload requires. It is NOT the layout
of the registry's own reports, so there is no reading counterpart.
"""

__all__ = [
    "UPDATES_HEADER",
    "UpdateRecord",
]

UPDATES_HEADER = (
    "First Name,Last Name,Email Address,Address 1,Address 2,City,State,Zip Code,"
    "Home Phone,Work Phone,Cell Phone,Pet Name,Microchip Number,Service Date,"
    "Date of Birth,Species,Sex,Spayed/Neutered,Primary Breed,Secondary Breed,"
    "Rescue Group Email,Notes"
)


@dataclass(frozen=True)
class UpdateRecord:
    """Snapshot of a dog's registration data, in upload column order."""
    first_name: str
    last_name: str
    email: str
    address_1: str
    address_2: str
    city: str
    state: str
    zip_code: str
    home_phone: str
    work_phone: str
    cell_phone: str
    pet_name: str
    microchip: str
    service_date: str
    date_of_birth: str
    species: str
    sex: str
    spayed_neutered: str
    primary_breed: str
    secondary_breed: str
    rescue_group_email: str
    notes: str
    number: int = 0  # registry number, not exported

    @classmethod
    def from_dog(
        cls,
        dog: Dog,
        microchip: str,
        organization: OrganizationConfig,
        today: date | None = None,
    ) -> UpdateRecord:
        """Build the registration row for ``dog``.

        Adopted dogs are registered to the adopter. Anyone else is registered
        to the rescue until adopted, using the organization's placeholder
        contact. The service date is always today. Spayed/Neutered is always
        "Yes": the DIR records the dog's condition on arrival, and every dog
        is fixed before adoption.

        Args:
            dog: The (already verified) dog record
            microchip: The verified, normalized chip number
            organization: Placeholder contact and defaults
            today: Service date; defaults to the current date
        """
        today = today or date.today()
        if dog.is_adopted():
            contact = dict(
                first_name=dog.adoption_fname,
                last_name=dog.adoption_lname,
                email=dog.adoption_email,
                # The registry has no second address line
                address_1=dog.adoption_address,
                address_2="",
                city=dog.adoption_city,
                state=dog.adoption_state,
                zip_code=dog.adoption_zip,
                home_phone=dog.adoption_home_phone,
                work_phone=dog.adoption_work_phone,
                cell_phone=dog.adoption_cell_phone,
            )
        else:
            contact = dict(
                first_name=organization.first_name,
                last_name=organization.last_name,
                email=organization.email,
                address_1="",
                address_2="",
                city="",
                state="",
                zip_code="",
                home_phone=organization.phone,
                work_phone="",
                cell_phone="",
            )
        return cls(
            **contact,
            # Many dogs share a name, but the registry number is kept in the notes only
            pet_name=dog.name,
            microchip=microchip,
            service_date=today.strftime("%Y-%m-%d"),
            date_of_birth=dog.compute_date_of_birth() or "",
            species=organization.species,
            sex=dog.sex,
            spayed_neutered="Yes",
            primary_breed=organization.primary_breed,
            secondary_breed="",
            rescue_group_email=organization.email,
            notes=f"{organization.name} #{dog.number}",
            number=dog.number,
        )

    def to_row(self) -> TabularRow:
        return TabularRow(astuple(self)[:-1])
