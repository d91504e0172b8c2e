from __future__ import annotations

import re

from .fields import ValidationResult

"""Microchip number validation.

There is no single microchip standard but several:

FDXB / ISO chips
    Exactly 15 decimal digits. When the first digit is 9 the first 3 or 5
    digits identify the manufacturer (981 Datamars, 98102 Found Animals and
    friends, 956 Trovan, 977 AVID, 982 Allflex, 985 Destron Fearing); otherwise
    the first digits are a country code, which we do not accept.

FDXA / non-ISO chips
    10 character alphanumeric codes (AVID, 24PetWatch, HomeAgain, AKC/CAR all
    fit a 10 digit hexadecimal pattern), or old 9 digit decimal numbers,
    traditionally written as three groups of three separated by a space or an
    asterisk.

Nothing can really be "fixed" except squeezing the separators out of the old
9 digit form.
"""

__all__ = [
    "verify_microchip",
]

_ISO_RE = re.compile(r"9[0-9]{14}")
# One dog was chipped with a 202 prefix chip that the service accepts
_SPECIAL_RE = re.compile(r"202[0-9]{12}")
_FDXA_RE = re.compile(r"[0-9A-Fa-f]{10}")
_LEGACY_RE = re.compile(r"([0-9]{3})[ *]?([0-9]{3})[ *]?([0-9]{3})")


def verify_microchip(chip: str) -> ValidationResult:
    """Check a microchip number and normalize the legacy 9 digit form.

    On failure the value is returned unchanged; callers checking chips they
    already know are unregistered may choose not to report the problem.
    """
    if chip == "":
        return ValidationResult.failed(chip, "microchip cannot be blank")
    if _ISO_RE.fullmatch(chip) or _SPECIAL_RE.fullmatch(chip) or _FDXA_RE.fullmatch(chip):
        return ValidationResult.passed(chip)
    m = _LEGACY_RE.fullmatch(chip)
    if m is not None:
        return ValidationResult.passed(m.group(1) + m.group(2) + m.group(3))
    return ValidationResult.failed(chip, f'invalid microchip "{chip}"')
