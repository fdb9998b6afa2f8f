"""Fixed-capacity pages of CSV rows and their reading and writing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence, TextIO

from smjoin.io_tracker import IoTracker

TUPLES_PER_PAGE = 10
MAX_BUFFER_PAGES = 4
CSV_SEP = ","

Row = list[str]


@dataclass
class Page:
    """A page holding up to TUPLES_PER_PAGE rows."""

    rows: list[Row] = field(default_factory=list)

    def add(self, row: Sequence[str]) -> None:
        """Append a row to the page."""
        self.rows.append(list(row))

    def clear(self) -> None:
        """Remove every row from the page."""
        self.rows.clear()

    def is_full(self) -> bool:
        """True when the page holds TUPLES_PER_PAGE rows."""
        return len(self.rows) == TUPLES_PER_PAGE

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]


def split_line(line: str) -> list[str]:
    """Split a CSV line on the separator; a single trailing empty field is dropped."""
    fields = line.split(CSV_SEP)
    if fields[-1] == "":
        fields.pop()
    return fields


def format_row(row: Sequence[str]) -> str:
    """Join the fields of a row with the separator."""
    return CSV_SEP.join(row)


def _read_line(stream: TextIO) -> str | None:
    raw = stream.readline()
    if not raw:
        return None
    return raw.removesuffix("\n")


def read_page(stream: TextIO, column_count: int, tracker: IoTracker) -> Page:
    """Read the next page of rows from a stream.

    Blank lines are skipped and short rows are padded with empty fields.
    An empty page means the stream is exhausted; only a non-empty page
    counts as a read.
    """
    page = Page()
    while len(page) < TUPLES_PER_PAGE:
        line = _read_line(stream)
        if line is None:
            break
        if not line:
            continue
        row = split_line(line)
        row.extend("" for _ in range(column_count - len(row)))
        page.add(row)
    if page:
        tracker.record_read()
    return page


def write_page(stream: TextIO, page: Page, tracker: IoTracker) -> None:
    """Write every row of a page, one per line, and count one write."""
    for row in page:
        stream.write(format_row(row))
        stream.write("\n")
    tracker.record_write()