"""Command line entry point: join two CSV files and report I/O figures."""

from __future__ import annotations

import sys
from typing import Sequence

from smjoin.join import sort_merge_join
from smjoin.table import Table

PROG = "smjoin"

_USAGE = (
    "Usage: {prog} <tableA.csv> <tableB.csv> <colA> <colB> <output.csv>\n"
    "Example:\n"
    "  {prog} data/wine.csv data/country.csv production_country_id country_id"
    " wine_country.csv"
)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the join described by the arguments; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 5:
        print(_USAGE.format(prog=PROG), file=sys.stderr)
        return 1

    path_a, path_b, column_a, column_b, out_csv = args
    try:
        stats = sort_merge_join(Table(path_a), Table(path_b), column_a, column_b, out_csv)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(f"#I/Os       : {stats.io_ops}")
    print(f"#Pages out  : {stats.pages_out}")
    print(f"#Tuples out : {stats.tuples_out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())