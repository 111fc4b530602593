import json

from roster.cli import main


def _write(tmp_path, text, name="students.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_stats_json(tmp_path, capsys, sample_csv):
    path = _write(tmp_path, sample_csv)
    assert main(["stats", path, "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["total"] == 3
    assert data["dimensions"]["gender"]["counts"] == {"Male": 2, "Female": 1}


def test_stats_table(tmp_path, capsys, sample_csv):
    path = _write(tmp_path, sample_csv)
    assert main(["stats", path, "-d", "email_domain", "--top", "1"]) == 0
    out = capsys.readouterr().out
    assert "EMAIL_DOMAIN (3 contributing)" in out
    assert "x.com" in out
    assert "1 more" in out


def test_validate(tmp_path, capsys, sample_csv):
    assert main(["validate", _write(tmp_path, sample_csv)]) == 0
    out = capsys.readouterr().out
    assert "Accepted: 2" in out
    assert "Skipped:  1" in out


def test_validate_nothing_to_import(tmp_path):
    path = _write(tmp_path, "name,email,gender\n,a@x.com,M\n")
    assert main(["validate", path]) == 1


def test_validate_latin1_upload(tmp_path, capsys):
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"name,email,gender\nJos\xe9,j@x.com,M\n")
    assert main(["validate", str(path)]) == 0
    assert "Accepted: 1" in capsys.readouterr().out


def test_validate_missing_columns(tmp_path, capsys):
    path = _write(tmp_path, "name,gender\nAnn,F\n")
    assert main(["validate", path]) == 2
    assert "email" in capsys.readouterr().out


def test_export_filtered(tmp_path, sample_csv):
    path = _write(tmp_path, sample_csv)
    out_dir = tmp_path / "out"
    assert main(["export", path, "--gender", "male", "--direction", "desc", "--output", str(out_dir)]) == 0
    files = list(out_dir.glob("students-export-*.csv"))
    assert len(files) == 1
    lines = files[0].read_text(encoding="utf-8").split("\n")
    assert lines == ["id,name,email,gender", "3,,cy@x.com,M", '2,"Chen, Bo",bo@y.com,M']


def test_no_command(capsys):
    assert main([]) == 0
    assert "stats" in capsys.readouterr().out
