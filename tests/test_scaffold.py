import json
import subprocess
from unittest import mock

import pytest

from quantumn.scaffold import scaffold


def test_python_project_layout(tmp_path):
    project = scaffold("python", "my-app", tmp_path)
    assert project == tmp_path / "my-app"
    assert (project / "src" / "my_app" / "__init__.py").read_text() == ""
    assert (project / "tests" / "__init__.py").is_file()
    assert (project / "requirements.txt").read_text() == ""
    assert (project / ".gitignore").read_text() == "*.pyc\n__pycache__/\n.env\n.venv/\n"
    assert 'name="my-app",' in (project / "setup.py").read_text()
    assert (project / "README.md").read_text() == "# my-app\n\nA Python project.\n"


def test_py_alias_matches_python(tmp_path):
    project = scaffold("py", "demo", tmp_path)
    assert (project / "src" / "demo" / "__init__.py").is_file()


def test_go_project(tmp_path):
    project = scaffold("go", "hello", tmp_path)
    assert (project / "go.mod").read_text() == "module hello\n\ngo 1.21\n"
    assert "package main" in (project / "main.go").read_text()
    assert "*.dylib" in (project / ".gitignore").read_text()


def test_web_project(tmp_path):
    project = scaffold("html", "site", tmp_path)
    html = (project / "index.html").read_text()
    assert "<title>site</title>" in html
    assert "<h1>site</h1>" in html
    assert (project / "js" / "main.js").read_text() == "console.log('Hello, World!');\n"
    assert "box-sizing: border-box" in (project / "css" / "style.css").read_text()


def test_node_falls_back_to_manual_files(tmp_path):
    with mock.patch("quantumn.scaffold.subprocess.run", side_effect=FileNotFoundError("npm")):
        project = scaffold("node", "web-app", tmp_path)
    package = json.loads((project / "package.json").read_text())
    assert package["name"] == "web-app"
    assert package["scripts"]["start"] == "node index.js"
    assert (project / ".gitignore").read_text() == "node_modules/\n.env\n"


def test_rust_project_after_cargo_new(tmp_path):
    def fake_cargo(args, cwd, **kwargs):
        (cwd / args[2]).mkdir()
        return subprocess.CompletedProcess(args, 0, b"", b"")

    with mock.patch("quantumn.scaffold.subprocess.run", side_effect=fake_cargo) as run:
        project = scaffold("rust", "tool", tmp_path)
    assert run.call_args.args[0] == ["cargo", "new", "tool"]
    assert (project / ".gitignore").read_text() == "/target\n**/*.rs.bk\nCargo.lock\n"
    assert (project / "README.md").read_text().startswith("# tool\n\nA Rust project.")


def test_rust_cargo_failure_returns_none(tmp_path, capsys):
    failed = subprocess.CompletedProcess(["cargo"], 101, b"", b"boom")
    with mock.patch("quantumn.scaffold.subprocess.run", return_value=failed):
        assert scaffold("rs", "tool", tmp_path) is None
    assert "Failed to create project: boom" in capsys.readouterr().out
    assert not (tmp_path / "tool").exists()


def test_unknown_type(tmp_path, capsys):
    assert scaffold("cobol", "old", tmp_path) is None
    assert list(tmp_path.iterdir()) == []
    assert "Available types: rust, python, node, web, go" in capsys.readouterr().out


@pytest.mark.parametrize("kind", ["go", "web", "python"])
def test_rerun_is_idempotent(tmp_path, kind):
    first = scaffold(kind, "again", tmp_path)
    snapshot = sorted(p.relative_to(first) for p in first.rglob("*"))
    second = scaffold(kind, "again", tmp_path)
    assert second == first
    assert sorted(p.relative_to(second) for p in second.rglob("*")) == snapshot