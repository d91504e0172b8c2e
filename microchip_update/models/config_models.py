from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the microchip update run.

These are filled in by microchip_update.config.loader from the YAML file (or
left at their defaults when no file is used). Command line options override
cutoff_year and the layouts.
"""

__all__ = [
    "DEFAULT_CUTOFF_YEAR",
    "OrganizationConfig",
    "RunConfig",
]

# Dogs acquired before 1 January of this year are ignored
DEFAULT_CUTOFF_YEAR = 2019


@dataclass(frozen=True)
class OrganizationConfig:
    """Contact details used when a dog is registered to the rescue itself.

    The registration service requires a name, email and phone even for dogs
    that have not been adopted yet.
    """
    name: str = "NGRR"
    first_name: str = "NGRR"
    last_name: str = "Rescue"
    email: str = "microchips@ngrr.org"
    phone: str = ""
    species: str = "Dog"
    primary_breed: str = "Golden Retriever"


@dataclass(frozen=True)
class RunConfig:
    """Root configuration object for one comparison run."""
    cutoff_year: int = DEFAULT_CUTOFF_YEAR
    old_layout: str = "new"  # DIR layout version of the old snapshot
    new_layout: str = "new"  # ... and of the new snapshot
    default_state: str = "CA"  # assumed when an adopter's state is blank
    audit_missing_microchips: bool = False
    organization: OrganizationConfig = field(default_factory=OrganizationConfig)
