import io
import logging

import pytest

from curage.__main__ import check_file, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("CURAGE_BLOCK_SCOPING", raising=False)
    monkeypatch.delenv("CURAGE_LOG_LEVEL", raising=False)


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_check_file_reports_sorted_one_based_positions(tmp_path):
    path = _write(tmp_path, "bad.cur", "let x = y\nlet z = 1 2\n")
    out = io.StringIO()
    assert check_file(path, out) == 2
    assert out.getvalue().splitlines() == [
        f"{path}:1:9: warning: 'y' is not defined.",
        f"{path}:2:11: warning: Expected an end of line.",
    ]


def test_clean_file_exits_zero(tmp_path):
    path = _write(tmp_path, "ok.cur", "let i = 0\nwhile i < 3\nset i = i + 1\nend\n")
    out = io.StringIO()
    assert main([str(path)], out=out) == 0
    assert out.getvalue() == ""


def test_diagnostics_exit_one(tmp_path):
    good = _write(tmp_path, "ok.cur", "let a = 1\n")
    bad = _write(tmp_path, "bad.cur", "end\n")
    out = io.StringIO()
    assert main([str(good), str(bad)], out=out) == 1
    assert out.getvalue() == f"{bad}:1:1: warning: Unexpected 'end'.\n"


def test_block_scoping_option(tmp_path):
    path = _write(tmp_path, "blocks.cur", "if 1\nlet y = 2\nend\nlet z = y\n")
    assert main([str(path)], out=io.StringIO()) == 0
    assert main([str(path), "--block-scoping"], out=io.StringIO()) == 1


def test_missing_file_exits_two(tmp_path, caplog):
    missing = tmp_path / "missing.cur"
    with caplog.at_level(logging.ERROR):
        assert main([str(missing)], out=io.StringIO()) == 2
    (record,) = caplog.records
    assert record.name == "curage.__main__"
    assert str(missing) in record.getMessage()


def test_bad_log_level_is_a_usage_error(tmp_path):
    path = _write(tmp_path, "ok.cur", "let a = 1\n")
    with pytest.raises(SystemExit) as exc_info:
        main([str(path), "--log-level", "chatty"], out=io.StringIO())
    assert exc_info.value.code == 2
