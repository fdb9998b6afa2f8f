"""Sort-merge join of two CSV tables with page-level I/O accounting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Sequence, TextIO

from smjoin.external_sorter import external_sort
from smjoin.io_tracker import IoTracker
from smjoin.page import CSV_SEP, Page, Row, format_row, read_page, write_page
from smjoin.table import Table


@dataclass
class JoinStats:
    """Figures reported after a join."""

    io_ops: int = 0
    pages_out: int = 0
    tuples_out: int = 0


class _Mark(NamedTuple):
    page: Page
    index: int
    stream_pos: int


class _SortedCursor:
    """Page-at-a-time reader of a sorted run that can go back to a mark."""

    def __init__(
        self, stream: TextIO, column_count: int, key_index: int, tracker: IoTracker
    ) -> None:
        self._stream = stream
        self._column_count = column_count
        self._key_index = key_index
        self._tracker = tracker
        stream.readline()
        tracker.record_read()
        self.page = Page()
        self.index = 0
        self._page_start = 0
        self.load()

    def load(self) -> bool:
        """Read the page at the stream's position; False when none is left."""
        self._page_start = self._stream.tell()
        self.page = read_page(self._stream, self._column_count, self._tracker)
        return bool(self.page)

    @property
    def row(self) -> Row:
        return self.page[self.index]

    @property
    def key(self) -> str:
        return self.row[self._key_index]

    def advance(self) -> bool:
        """Move to the next row, loading a page when needed."""
        self.index += 1
        if self.index < len(self.page):
            return True
        self.index = 0
        return self.load()

    def mark(self) -> _Mark:
        return _Mark(self.page, self.index, self._page_start)

    def restore(self, mark: _Mark) -> None:
        """Return to a mark; the stream goes back to where the marked page began."""
        self._stream.seek(mark.stream_pos)
        self.page = mark.page
        self.index = mark.index


def _write_joined_header(
    stream: TextIO,
    header_a: Sequence[str],
    header_b: Sequence[str],
    tracker: IoTracker,
) -> None:
    line = format_row([f"A.{name}" for name in header_a])
    line += "".join(f"{CSV_SEP}B.{name}" for name in header_b)
    stream.write(line)
    stream.write("\n")
    tracker.record_write()  # the header counts as one page


def _merge_join(
    a: _SortedCursor, b: _SortedCursor, fout: TextIO, tracker: IoTracker
) -> int:
    out = Page()
    produced = 0

    while a.page and b.page:
        while a.page and b.page and a.key < b.key:
            a.advance()
        while a.page and b.page and a.key > b.key:
            b.advance()
        if not a.page or not b.page:
            break

        key = a.key
        group_start = b.mark()

        while a.page and a.key == key:
            row_a = a.row
            b.restore(group_start)
            while b.page and b.key == key:
                if out.is_full():
                    write_page(fout, out, tracker)
                    out.clear()
                out.add([*row_a, *b.row])
                produced += 1
                b.advance()
            a.advance()

        b.restore(group_start)
        while b.advance() and b.key == key:
            pass

    if out:
        write_page(fout, out, tracker)
    return produced


def sort_merge_join(
    table_a: Table,
    table_b: Table,
    column_a: str,
    column_b: str,
    out_csv: str | Path,
    work_dir: str | Path | None = None,
) -> JoinStats:
    """Join two tables on ``column_a == column_b`` and write the result to ``out_csv``.

    Both tables are first sorted externally; the sorted files are left in
    ``work_dir`` (the current directory by default).
    """
    tracker = IoTracker()
    directory = Path(".") if work_dir is None else Path(work_dir)

    sorted_a = external_sort(table_a, column_a, "A", tracker, directory)
    sorted_b = external_sort(table_b, column_b, "B", tracker, directory)

    key_a = table_a.col_index(column_a)
    key_b = table_b.col_index(column_b)

    with sorted_a.open(encoding="utf-8", newline="") as fa, sorted_b.open(
        encoding="utf-8", newline=""
    ) as fb, Path(out_csv).open("w", encoding="utf-8", newline="") as fout:
        a = _SortedCursor(fa, len(table_a.header), key_a, tracker)
        b = _SortedCursor(fb, len(table_b.header), key_b, tracker)
        _write_joined_header(fout, table_a.header, table_b.header, tracker)
        tuples_out = _merge_join(a, b, fout, tracker)

    return JoinStats(
        io_ops=tracker.operations(),
        pages_out=tracker.writes,
        tuples_out=tuples_out,
    )