from collections import Counter

import pytest

from smjoin.external_sorter import temp_run_path
from smjoin.join import sort_merge_join
from smjoin.table import Table


def _write_csv(path, header, rows):
    lines = [",".join(header), *(",".join(row) for row in rows)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _lines(path):
    return path.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def work(tmp_path):
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


def _tables(tmp_path, header_a, rows_a, header_b, rows_b):
    a = Table(_write_csv(tmp_path / "a.csv", header_a, rows_a))
    b = Table(_write_csv(tmp_path / "b.csv", header_b, rows_b))
    return a, b


def test_joins_matching_rows(tmp_path, work):
    a, b = _tables(
        tmp_path,
        ["id", "name"], [["1", "ana"], ["2", "bia"], ["3", "caio"]],
        ["id", "country"], [["2", "br"], ["3", "pt"], ["4", "es"]],
    )
    out = tmp_path / "out.csv"

    stats = sort_merge_join(a, b, "id", "id", out, work)

    lines = _lines(out)
    assert lines[0] == "A.id,A.name,B.id,B.country"
    assert lines[1:] == ["2,bia,2,br", "3,caio,3,pt"]
    assert stats.tuples_out == len(lines) - 1


def test_many_to_many_group(tmp_path, work):
    a, b = _tables(
        tmp_path,
        ["k", "x"], [["1", "x"], ["1", "y"], ["2", "z"]],
        ["k", "y"], [["1", "p"], ["1", "q"], ["3", "r"]],
    )
    out = tmp_path / "out.csv"

    stats = sort_merge_join(a, b, "k", "k", out, work)

    expected = ["1,x,1,p", "1,x,1,q", "1,y,1,p", "1,y,1,q"]
    assert Counter(_lines(out)[1:]) == Counter(expected)
    assert stats.tuples_out == len(expected)


def test_no_matches_writes_only_header(tmp_path, work):
    a, b = _tables(
        tmp_path,
        ["id"], [["1"], ["2"]],
        ["id"], [["3"], ["4"]],
    )
    out = tmp_path / "out.csv"

    stats = sort_merge_join(a, b, "id", "id", out, work)

    assert _lines(out) == ["A.id,B.id"]
    assert stats.tuples_out == 0


def test_stats_invariants(tmp_path, work):
    rows = [[f"{i:02d}", f"v{i}"] for i in range(30)]
    a, b = _tables(tmp_path, ["id", "v"], rows, ["id", "w"], rows[::3])
    out = tmp_path / "out.csv"

    stats = sort_merge_join(a, b, "id", "id", out, work)

    assert stats.tuples_out == len(_lines(out)) - 1
    assert 0 < stats.pages_out < stats.io_ops


def test_short_rows_are_padded_in_output(tmp_path, work):
    a, b = _tables(
        tmp_path,
        ["id", "name"], [["5"]],
        ["id", "tag"], [["5", "x"], ["6", "y"]],
    )
    out = tmp_path / "out.csv"

    sort_merge_join(a, b, "id", "id", out, work)

    assert _lines(out)[1:] == ["5,,5,x"]


def test_sorted_files_go_to_work_dir(tmp_path, work):
    a, b = _tables(tmp_path, ["id"], [["1"]], ["id"], [["1"], ["2"]])

    sort_merge_join(a, b, "id", "id", tmp_path / "out.csv", work)

    assert temp_run_path(work, "A", 0, 0).exists()
    assert temp_run_path(work, "B", 0, 0).exists()


def test_missing_join_column_raises(tmp_path, work):
    a, b = _tables(tmp_path, ["id"], [["1"]], ["id"], [["1"]])

    with pytest.raises(ValueError):
        sort_merge_join(a, b, "id", "missing", tmp_path / "out.csv", work)