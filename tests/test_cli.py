import sys

from smjoin.cli import main


def _write_csv(path, header, rows):
    lines = [",".join(header), *(",".join(row) for row in rows)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _inputs(tmp_path):
    a = _write_csv(tmp_path / "a.csv", ["id", "name"], [["1", "ana"], ["2", "bia"], ["3", "caio"]])
    b = _write_csv(tmp_path / "b.csv", ["id", "country"], [["2", "br"], ["3", "pt"], ["4", "es"]])
    return a, b


def test_wrong_argument_count_prints_usage(capsys):
    assert main(["only", "two"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_reads_sys_argv_when_none(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["smjoin"])
    assert main() == 1
    assert "Usage" in capsys.readouterr().err


def test_successful_join_reports_figures(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    a, b = _inputs(tmp_path)

    status = main([str(a), str(b), "id", "id", "out.csv"])

    assert status == 0
    out_lines = (tmp_path / "out.csv").read_text(encoding="utf-8").splitlines()
    assert out_lines[0] == "A.id,A.name,B.id,B.country"
    report = capsys.readouterr().out.splitlines()
    assert report[2] == f"#Tuples out : {len(out_lines) - 1}"
    assert report[0].startswith("#I/Os       : ")
    assert report[1].startswith("#Pages out  : ")


def test_missing_input_file_returns_2(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _, b = _inputs(tmp_path)

    status = main([str(tmp_path / "absent.csv"), str(b), "id", "id", "out.csv"])

    assert status == 2
    assert capsys.readouterr().err.startswith("Error:")


def test_unknown_column_returns_2(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    a, b = _inputs(tmp_path)

    status = main([str(a), str(b), "nope", "id", "out.csv"])

    assert status == 2
    assert "nope" in capsys.readouterr().err