"""Pure field validators used by the dog record."""

from .fields import (
    ValidationResult,
    parse_age,
    parse_date,
    verify_email,
    verify_phone,
    verify_sex,
    verify_spay_neuter,
    verify_state,
    verify_zip,
)
from .microchip import verify_microchip

__all__ = [
    "ValidationResult",
    "parse_age",
    "parse_date",
    "verify_email",
    "verify_microchip",
    "verify_phone",
    "verify_sex",
    "verify_spay_neuter",
    "verify_state",
    "verify_zip",
]
