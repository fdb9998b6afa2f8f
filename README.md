# smjoin

Joins two CSV tables on one column each, using a classic sort-merge join.
The join keeps only a few small pages in memory at a time. Every page that
moves between disk and memory is counted, so the package can show how much
I/O a join costs.

## How it works

- A page (`smjoin.page.Page`) holds up to 10 rows. The sort buffer holds at
  most 4 pages.
- Each table is first sorted with an external merge sort
  (`smjoin.external_sorter.external_sort`). Pass 0 cuts the table into
  sorted runs of up to 4 pages. Each later pass merges runs two at a time
  until one sorted file is left. Keys are compared as text.
- The two sorted files are then merged. Every pair of rows whose key values
  are equal is written to the output. An output row is the row of the first
  table followed by the row of the second.
- Output columns keep their names with the prefix `A.` for the first table
  and `B.` for the second.
- Each page read and each page written counts as one I/O
  (`smjoin.io_tracker.IoTracker`). A header line also counts as one page.

CSV parsing is simple. Fields are split on commas; quoting is not
supported. A single trailing empty field is dropped. Blank lines are
skipped, and a row with fewer fields than the header is padded with empty
values.

## Installation

```
pip install .
```

## Command line

```
smj <tableA.csv> <tableB.csv> <colA> <colB> <output.csv>
```

Example:

```
smj data/wine.csv data/country.csv country_id id result.csv
```

When it finishes, the command prints three figures:

```
#I/Os       : <reads plus writes>
#Pages out  : <pages written>
#Tuples out : <rows in the output>
```

The pages-written figure counts every page written during the run: the
sorted runs as well as the output.

Exit status:

- 0 on success.
- 1 when the number of arguments is wrong; a usage message goes to stderr.
- 2 when the join fails, for example a file that is missing or empty, or a
  column that does not exist; the message goes to stderr.

The command writes its sorted files to the current directory.

## Library use

```python
from smjoin.table import Table
from smjoin.join import sort_merge_join

stats = sort_merge_join(
    Table("wine.csv"),
    Table("country.csv"),
    "country_id",
    "id",
    "result.csv",
    work_dir=".",
)
print(stats.io_ops, stats.pages_out, stats.tuples_out)
```

`sort_merge_join` returns a `JoinStats` with `io_ops`, `pages_out` and
`tuples_out`. `work_dir` defaults to the current directory.

The parts can be used on their own:

- `Table(path)` reads only the header of a CSV file. `Table.col_index(name)`
  gives a column's position and raises `ValueError` for an unknown name.
  `Table.cursor(tracker)` opens a `PageCursor`, which yields pages with
  `next_page()` or by iteration, goes back to the first row with `reset()`,
  and works as a context manager.
- `external_sort(table, column, tag, tracker, directory)` sorts a table on
  one column and returns the path of the sorted CSV. A table with no data
  rows gives a file that holds only the header.
- `read_page`, `write_page`, `split_line` and `format_row` in `smjoin.page`
  read and write pages of rows and count each page on an `IoTracker`.

Temporary runs are named `tmp_<tag>_p<pass>_r<run>.csv`
(`temp_run_path`). The join uses the tags `A` and `B`.

## What it does not do

- It does not remove the final sorted file of each table; the
  `tmp_A_...` and `tmp_B_...` files stay in the working directory after a
  join. Intermediate runs are removed once they are merged.
- It does not handle quoted CSV fields, other separators, or typed
  (numeric) comparison of keys.
- It performs only equi-joins on a single column; it is not a query engine
  and keeps no storage of its own.

## Tests

```
pip install .[test]
pytest
```