"""A CSV table on disk, read a page at a time."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from smjoin.io_tracker import IoTracker
from smjoin.page import Page, read_page, split_line


class Table:
    """A CSV file on disk; only its header is kept in memory."""

    def __init__(self, csv_path: str | Path) -> None:
        self.path = Path(csv_path)
        with self.path.open(encoding="utf-8", newline="") as fin:
            header_line = fin.readline()
        if not header_line:
            raise ValueError(f"empty CSV: {self.path}")
        self.header: list[str] = split_line(header_line.removesuffix("\n"))

    def col_index(self, name: str) -> int:
        """Position of the named column in the header."""
        try:
            return self.header.index(name)
        except ValueError:
            raise ValueError(f"column {name} does not exist in {self.path}") from None

    def cursor(self, tracker: IoTracker) -> PageCursor:
        """Open a sequential page cursor over the table's rows."""
        return PageCursor(self, tracker)


class PageCursor:
    """Sequential reader of a table's data pages."""

    def __init__(self, table: Table, tracker: IoTracker) -> None:
        self.table = table
        self.tracker = tracker
        self._column_count = len(table.header)
        self._stream = table.path.open(encoding="utf-8", newline="")
        self._skip_header()

    def _skip_header(self) -> None:
        self._stream.readline()
        self.tracker.record_read()

    def next_page(self) -> Page:
        """Read the next page; an empty page means the end of the data."""
        return read_page(self._stream, self._column_count, self.tracker)

    def reset(self) -> None:
        """Go back to the first data row."""
        self._stream.seek(0)
        self._skip_header()

    def close(self) -> None:
        """Close the underlying file."""
        self._stream.close()

    def __iter__(self) -> Iterator[Page]:
        while page := self.next_page():
            yield page

    def __enter__(self) -> PageCursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()