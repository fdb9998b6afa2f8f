"""External merge sort of a CSV table within a bounded page buffer.

Pass 0 cuts the table into sorted runs of up to MAX_BUFFER_PAGES pages;
later passes merge the runs two at a time until one sorted file remains.
"""

from __future__ import annotations

import heapq
from collections import deque
from operator import itemgetter
from pathlib import Path
from typing import Iterable, Iterator, Sequence, TextIO

from smjoin.io_tracker import IoTracker
from smjoin.page import (
    MAX_BUFFER_PAGES,
    TUPLES_PER_PAGE,
    Page,
    Row,
    format_row,
    read_page,
    write_page,
)
from smjoin.table import Table


def temp_run_path(directory: str | Path, tag: str, pass_no: int, run_id: int) -> Path:
    """Path of the temporary file holding one run of one pass."""
    return Path(directory) / f"tmp_{tag}_p{pass_no}_r{run_id}.csv"


def _write_run(
    path: Path, header: Sequence[str], rows: Iterable[Row], tracker: IoTracker
) -> None:
    """Write a header line and the rows, one page at a time."""
    with path.open("w", encoding="utf-8", newline="") as fout:
        fout.write(format_row(header))
        fout.write("\n")
        tracker.record_write()  # the header counts as one page

        out = Page()
        for row in rows:
            if out.is_full():
                write_page(fout, out, tracker)
                out.clear()
            out.add(row)
        if out:
            write_page(fout, out, tracker)


def _run_rows(stream: TextIO, column_count: int, tracker: IoTracker) -> Iterator[Row]:
    while page := read_page(stream, column_count, tracker):
        yield from page


def _initial_runs(
    table: Table, key_index: int, tag: str, tracker: IoTracker, directory: Path
) -> deque[Path]:
    capacity = MAX_BUFFER_PAGES * TUPLES_PER_PAGE
    key = itemgetter(key_index)
    runs: deque[Path] = deque()
    buffer: list[Row] = []

    def spill() -> None:
        buffer.sort(key=key)
        path = temp_run_path(directory, tag, 0, len(runs))
        _write_run(path, table.header, buffer, tracker)
        runs.append(path)
        buffer.clear()

    with table.cursor(tracker) as cursor:
        for page in cursor:
            buffer.extend(page)
            if len(buffer) >= capacity:
                spill()
    if buffer:
        spill()
    return runs


def _merge_two(
    first: Path,
    second: Path,
    key_index: int,
    header: Sequence[str],
    out_path: Path,
    tracker: IoTracker,
) -> None:
    with first.open(encoding="utf-8", newline="") as fa, second.open(
        encoding="utf-8", newline=""
    ) as fb:
        for stream in (fa, fb):
            stream.readline()
            tracker.record_read()
        merged = heapq.merge(
            _run_rows(fa, len(header), tracker),
            _run_rows(fb, len(header), tracker),
            key=itemgetter(key_index),
        )
        _write_run(out_path, header, merged, tracker)


def _merge_pass(
    runs: deque[Path],
    key_index: int,
    header: Sequence[str],
    tag: str,
    pass_no: int,
    tracker: IoTracker,
    directory: Path,
) -> deque[Path]:
    merged: deque[Path] = deque()
    while runs:
        first = runs.popleft()
        if not runs:
            merged.append(first)  # a lone run moves on to the next pass
            break
        second = runs.popleft()
        out_path = temp_run_path(directory, tag, pass_no, len(merged))
        _merge_two(first, second, key_index, header, out_path, tracker)
        merged.append(out_path)
        first.unlink(missing_ok=True)
        second.unlink(missing_ok=True)
    return merged


def external_sort(
    table: Table,
    column: str,
    tag: str,
    tracker: IoTracker,
    directory: str | Path = ".",
) -> Path:
    """Sort a table on one column and return the path of the sorted CSV.

    Temporary runs are named after ``tag`` and written to ``directory``;
    a table without data rows yields a sorted file holding only the header.
    """
    key_index = table.col_index(column)
    work_dir = Path(directory)

    runs = _initial_runs(table, key_index, tag, tracker, work_dir)
    if not runs:
        empty = temp_run_path(work_dir, tag, 0, 0)
        _write_run(empty, table.header, (), tracker)
        return empty

    pass_no = 1
    while len(runs) > 1:
        runs = _merge_pass(runs, key_index, table.header, tag, pass_no, tracker, work_dir)
        pass_no += 1
    return runs[0]