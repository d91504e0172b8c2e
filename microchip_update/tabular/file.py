from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from charset_normalizer import from_bytes

from .row import TabularRow

"""A whole spreadsheet as an ordered collection of TabularRow objects.

Reading optionally checks the first line against an expected header, and then
insists that every following row has the same number of columns. Either
failure is fatal for the run: a file in an unexpected layout cannot be mapped
onto dog records safely.
"""

__all__ = [
    "ColumnCountError",
    "HeaderMismatchError",
    "TabularFile",
    "TabularFileError",
    "decode_bytes",
]


class TabularFileError(Exception):
    """Raised when a CSV file cannot be read or written."""


class HeaderMismatchError(TabularFileError):
    """Raised when the header row is not the one expected for the layout."""


class ColumnCountError(TabularFileError):
    """Raised when a row has a different number of columns than the header."""

    def __init__(self, line_number: int, expected: int, found: int) -> None:
        super().__init__(
            f"wrong number of columns in line {line_number} (expected {expected}, found {found})"
        )
        self.line_number = line_number
        self.expected = expected
        self.found = found


def decode_bytes(raw: bytes) -> str:
    """Decode an exported CSV, whatever code page the spreadsheet used.

    A UTF-8 byte order mark is removed so that it cannot spoil the header
    comparison. Undecodable bytes are replaced rather than rejected.
    """
    if raw.startswith(b"\xef\xbb\xbf"):
        return raw[3:].decode("utf-8", errors="replace")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass
    match = from_bytes(raw).best()
    if match is None:
        return raw.decode("utf-8", errors="replace")
    return str(match)


class TabularFile:
    """Ordered collection of rows; file order is preserved on write."""

    def __init__(self, rows: Iterable[TabularRow] = ()) -> None:
        self._rows: list[TabularRow] = [TabularRow(r) for r in rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[TabularRow]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> TabularRow:
        return self._rows[index]

    def add_row(self, row: Iterable[str]) -> None:
        """Append a copy of ``row``; the file owns its rows."""
        self._rows.append(TabularRow(row))

    def clear(self) -> None:
        self._rows.clear()

    def read_text(self, text: str, expected_header: str | None = None) -> int:
        """Parse CSV text, replacing any rows already held.

        Args:
            text: Whole file contents
            expected_header: Literal header line the first line must match,
                or None when the file has no header to check

        Returns:
            Number of data rows read

        Raises:
            HeaderMismatchError: The first line does not match expected_header
            ColumnCountError: A row's field count differs from the header
                (or, without a header, from the first data row)
        """
        self.clear()
        # Only \n (or \r\n) ends a line; other line-break characters stay in their field
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        while lines and lines[-1] == "":
            lines.pop()

        columns: int | None = None
        start = 0
        if expected_header is not None:
            header = TabularRow.parse(lines[0]) if lines else TabularRow()
            if not header.verify(expected_header):
                raise HeaderMismatchError("header does not match")
            columns = len(header)
            start = 1

        for line_number, line in enumerate(lines[start:], start=start + 1):
            row = TabularRow.parse(line)
            if columns is None:
                columns = len(row)
            elif len(row) != columns:
                raise ColumnCountError(line_number, columns, len(row))
            self._rows.append(row)
        return len(self._rows)

    def read(self, source: Path | str | TextIO, expected_header: str | None = None) -> int:
        """Read a CSV file (path or open text stream).

        Raises:
            TabularFileError: The file cannot be opened, or any of the
                header/column errors raised by read_text()
        """
        if hasattr(source, "read"):
            return self.read_text(source.read(), expected_header)  # type: ignore[union-attr]
        path = Path(source)  # type: ignore[arg-type]
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise TabularFileError(f"unable to open {path}: {e}") from e
        return self.read_text(decode_bytes(raw), expected_header)

    def format_lines(self, header: str | None = None) -> Iterator[str]:
        """Yield every line to be written, header first when given."""
        if header is not None:
            yield TabularRow.parse(header).format()
        for row in self._rows:
            yield row.format()

    def write(self, sink: Path | str | TextIO, header: str | None = None) -> int:
        """Write the header (if any) and every row, one per line.

        Returns:
            Number of data rows written

        Raises:
            TabularFileError: The file cannot be created
        """
        if hasattr(sink, "write"):
            for line in self.format_lines(header):
                sink.write(line + "\n")  # type: ignore[union-attr]
            return len(self._rows)
        path = Path(sink)  # type: ignore[arg-type]
        try:
            with path.open("w", encoding="utf-8", newline="") as f:
                for line in self.format_lines(header):
                    f.write(line + "\n")
        except OSError as e:
            raise TabularFileError(f"unable to create {path}: {e}") from e
        return len(self._rows)
