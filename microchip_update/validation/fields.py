from __future__ import annotations

import re
from dataclasses import dataclass

"""Field validators for dog registry data.

Every validator is a pure function: it never modifies its input and never
reports anything. It returns a ValidationResult carrying the normalized (or
defaulted) value, a pass/fail verdict and, on failure, the text of the
problem. The caller decides whether to adopt the value and whether the problem
is worth a diagnostic.

The registry web page performs no validation at all, so these checks are only
applied to the dogs we actually have to register.
"""

__all__ = [
    "DEFAULT_STATE",
    "US_STATES",
    "ValidationResult",
    "parse_age",
    "parse_date",
    "verify_email",
    "verify_phone",
    "verify_sex",
    "verify_spay_neuter",
    "verify_state",
    "verify_zip",
]

# A blank state is assumed to be California
DEFAULT_STATE = "CA"

# USPS two letter state and territory abbreviations
US_STATES = frozenset(
    "AL AK AS AZ AR CA CO CT DE DC FM FL GA GU HI ID IL IN IA KS KY LA ME MH MD MA "
    "MI MN MS MO MT NE NV NH NJ NM NY NC ND MP OH OK OR PW PA PR RI SC SD TN TX UT "
    "VT VI VA WA WV WI WY".split()
)

_PHONE_RE = re.compile(
    r"\+?1?\s?\(?([0-9]{3})\)?[\s\-/*,.]*([0-9]{3})[\s\-=*,.]*([0-9]{4})"
)
_ZIP_RE = re.compile(r"[0-9]{5}(-[0-9]{4})?")
_EMAIL_RE = re.compile(r"[A-Za-z0-9_%+\-.]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_AGE_RE = re.compile(r"([0-9]+)\syears\s([0-9]+)\smonths")

MIN_YEAR = 1990
MAX_YEAR = 2099
MAX_AGE_YEARS = 20


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking one field value.

    Attributes:
        value: Normalized value on success; on failure whatever the field
            should hold afterwards (cleared, defaulted or unchanged)
        ok: True if the original value was acceptable
        problem: Diagnostic text when ok is False
    """
    value: str
    ok: bool
    problem: str | None = None

    @classmethod
    def passed(cls, value: str) -> ValidationResult:
        return cls(value=value, ok=True)

    @classmethod
    def failed(cls, value: str, problem: str) -> ValidationResult:
        return cls(value=value, ok=False, problem=problem)


def verify_phone(phone: str, which: str = "home") -> ValidationResult:
    """Check a phone number and reduce it to ten bare digits.

    Blank and the word "none" are accepted and become blank. Most of the
    common (and some dubious) punctuation styles are recognized by a single
    pattern; the result is area code + prefix + line number, e.g. 4085551212.
    International numbers are not supported.
    """
    if phone == "" or phone == "none":
        return ValidationResult.passed("")
    m = _PHONE_RE.fullmatch(phone)
    if m is None:
        return ValidationResult.failed("", f'invalid {which} phone "{phone}"')
    return ValidationResult.passed(m.group(1) + m.group(2) + m.group(3))


def verify_zip(zip_code: str) -> ValidationResult:
    """Five digits or ZIP+4 ("nnnnn-nnnn"); blank is not acceptable."""
    if zip_code == "":
        return ValidationResult.failed("", "zip code cannot be blank")
    if _ZIP_RE.fullmatch(zip_code):
        return ValidationResult.passed(zip_code)
    return ValidationResult.failed("", f'invalid zip code "{zip_code}"')


def verify_email(email: str) -> ValidationResult:
    """Check that an email address at least looks valid; blank is not."""
    if email == "":
        return ValidationResult.failed("", "email address cannot be blank")
    if _EMAIL_RE.fullmatch(email):
        return ValidationResult.passed(email)
    return ValidationResult.failed("", f'invalid email address "{email}"')


def verify_state(state: str, default: str = DEFAULT_STATE) -> ValidationResult:
    """Check a USPS state abbreviation.

    Plenty of adopters leave the state out, so a blank state silently becomes
    ``default`` and counts as valid.
    """
    if state == "":
        return ValidationResult.passed(default)
    if len(state) == 2 and state in US_STATES:
        return ValidationResult.passed(state)
    return ValidationResult.failed("", f'invalid state "{state}"')


def verify_sex(sex: str) -> ValidationResult:
    """Male or Female, any case. Anything else is reported and becomes "Male"."""
    if sex.lower() in ("male", "female"):
        return ValidationResult.passed(sex)
    return ValidationResult.failed("Male", f'invalid sex "{sex}"')


def verify_spay_neuter(neuter: str) -> ValidationResult:
    """Yes or No, any case. Anything else is reported and becomes "Yes"."""
    if neuter.lower() in ("yes", "no"):
        return ValidationResult.passed(neuter)
    return ValidationResult.failed("Yes", f'invalid spay/neuter "{neuter}"')


def parse_date(text: str) -> tuple[int, int, int] | None:
    """Parse a YYYY-MM-DD date into (year, month, day).

    The ranges are checked (years 1990 to 2099, months 1-12, days 1-31) but not
    the number of days in the month. Returns None if the date is unusable.
    """
    m = _DATE_RE.fullmatch(text)
    if m is None:
        return None
    year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3))
    if not 1 <= month <= 12:
        return None
    if not 1 <= day <= 31:
        return None
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None
    return year, month, day


def parse_age(text: str) -> tuple[int, int] | None:
    """Parse an age written as "<N> years <M> months" into (years, months).

    Ages of more than 12 months or 20 years are implausible and rejected.
    """
    m = _AGE_RE.fullmatch(text.lower())
    if m is None:
        return None
    years, months = int(m.group(1)), int(m.group(2))
    if months > 12 or years > MAX_AGE_YEARS:
        return None
    return years, months


def format_date(year: int, month: int, day: int) -> str:
    """Format a date as MM/DD/YYYY, the form the registration service wants."""
    return f"{month:02d}/{day:02d}/{year:04d}"
