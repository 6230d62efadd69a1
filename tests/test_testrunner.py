import subprocess
from unittest.mock import patch

import pytest

from quantumn.testrunner import detect_test_command, run_tests


@pytest.mark.parametrize(
    "marker, expected",
    [
        ("Cargo.toml", ("cargo", ["test"])),
        ("package.json", ("npm", ["test"])),
        ("go.mod", ("go", ["test", "./..."])),
        ("pytest.ini", ("pytest", [])),
        ("setup.py", ("pytest", [])),
    ],
)
def test_detect_by_marker(tmp_path, marker, expected):
    (tmp_path / marker).write_text("", encoding="utf-8")
    assert detect_test_command(tmp_path) == expected


def test_detect_default_is_cargo(tmp_path):
    assert detect_test_command(tmp_path) == ("cargo", ["test"])


def test_cargo_takes_precedence(tmp_path):
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    (tmp_path / "Cargo.toml").write_text("", encoding="utf-8")
    assert detect_test_command(tmp_path) == ("cargo", ["test"])


def test_detect_uses_cwd(tmp_path, monkeypatch):
    (tmp_path / "go.mod").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert detect_test_command() == ("go", ["test", "./..."])


def test_run_tests_reports_result(tmp_path, monkeypatch):
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    completed = subprocess.CompletedProcess(["npm", "test"], 1, b"out", b"err")
    with patch("quantumn.testrunner.subprocess.run", return_value=completed) as run:
        result = run_tests(tmp_path)
    assert result.command == ("npm", "test")
    assert result.stdout == "out"
    assert result.stderr == "err"
    assert not result.passed
    assert run.call_args.kwargs["cwd"] == tmp_path


def test_run_tests_missing_runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with patch("quantumn.testrunner.subprocess.run", side_effect=FileNotFoundError("nope")):
        assert run_tests() is None