from __future__ import annotations

from collections.abc import Iterable

"""One row of a spreadsheet exported as CSV.

A row is nothing more than an ordered list of text fields, but it knows how to
parse itself from, and format itself to, a single CSV line. Parsing tolerates
the artifacts spreadsheets leave behind:

- padding spaces and tabs around fields
- the "protect as text" form ="00123", which is unwrapped to 00123 (a
  field that merely starts with = is left alone)

Embedded line breaks inside quoted fields are not supported; the registry
exports never contain them.
"""

__all__ = [
    "COMMA",
    "QUOTE",
    "TabularRow",
]

COMMA = ","
QUOTE = '"'
_BLANKS = " \t"


def trim_field(value: str) -> str:
    """Strip leading and trailing spaces and tabs (nothing else)."""
    return value.strip(_BLANKS)


def is_protected(value: str) -> bool:
    """True for the spreadsheet "protect as text" form ="value".

    Only the complete form counts; a field that merely starts with '=' is
    ordinary text.
    """
    return len(value) >= 3 and value.startswith("=" + QUOTE) and value.endswith(QUOTE)


def needs_quotes(value: str) -> bool:
    return QUOTE in value or COMMA in value


def format_field(value: str) -> str:
    """Quote a field if it contains a comma or quote, doubling embedded quotes."""
    if not needs_quotes(value):
        return value
    return QUOTE + value.replace(QUOTE, QUOTE + QUOTE) + QUOTE


def _split_fields(line: str) -> list[str]:
    """Split one CSV line at the commas outside quoted spans.

    Fields come back raw, quotes and padding included. A doubled quote
    toggles the span twice, so it never ends one.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in line:
        if ch == COMMA and not in_quotes:
            fields.append("".join(current))
            current = []
            continue
        if ch == QUOTE:
            in_quotes = not in_quotes
        current.append(ch)
    fields.append("".join(current))
    return fields


def _unquote(field: str) -> str:
    """Remove the quoting from one raw field.

    A quote outside a quoted span opens one; inside, a quote closes it. A
    quote that reopens a span immediately after one was closed is an escaped
    literal quote, which gives the usual "" convention.
    """
    current: list[str] = []
    in_quotes = False
    quote_last = False
    for ch in field:
        if ch == QUOTE:
            if not in_quotes:
                if quote_last:
                    current.append(QUOTE)
                quote_last = False
                in_quotes = True
            else:
                in_quotes = False
                quote_last = True
        else:
            current.append(ch)
            quote_last = False
    return "".join(current)


def _parse_field(raw: str) -> str:
    # trim, unwrap ="...", trim again: the unwrap can expose more white space
    value = trim_field(raw)
    if is_protected(value):
        value = value[1:]
    return trim_field(_unquote(value))


class TabularRow(list[str]):
    """Ordered collection of text fields making up one spreadsheet row."""

    def __init__(self, fields: Iterable[str] = ()) -> None:
        super().__init__(fields)

    @classmethod
    def blank(cls, columns: int) -> TabularRow:
        """Create a row of ``columns`` empty fields."""
        return cls([""] * columns)

    @classmethod
    def parse(cls, line: str) -> TabularRow:
        """Parse one line of CSV text.

        An empty line yields a row with zero fields, not one empty field.
        Each field is trimmed, unwrapped from ="..." and trimmed again, since
        the unwrap can expose more white space.
        """
        if not line:
            return cls()
        return cls(_parse_field(f) for f in _split_fields(line))

    def format(self) -> str:
        """Format this row as one CSV line (no line terminator)."""
        return COMMA.join(format_field(f) for f in self)

    def verify(self, expected: TabularRow | str) -> bool:
        """Return True if this row matches ``expected`` field for field.

        ``expected`` may be another row or a literal CSV line, which is parsed
        with the same rules first. Used to check header rows.
        """
        if isinstance(expected, str):
            expected = TabularRow.parse(expected)
        return list(self) == list(expected)

    def __repr__(self) -> str:
        return f"TabularRow({list(self)!r})"
