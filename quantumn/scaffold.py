"""Project scaffolding for a few common languages."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

AVAILABLE_TYPES = "rust, python, node, web, go"


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _write(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)


def _scaffold_rust(name: str, base: Path) -> Path | None:
    print(f"Creating Rust project: {name}")
    out = subprocess.run(["cargo", "new", name], cwd=base, capture_output=True, check=False)
    if out.returncode != 0:
        print(f"Failed to create project: {_decode(out.stderr)}")
        return None
    project = base / name
    _write(project / ".gitignore", "/target\n**/*.rs.bk\nCargo.lock\n")
    _write(
        project / "README.md",
        f"# {name}\n\nA Rust project.\n\n## Usage\n\n```\ncargo run\n```\n",
    )
    print(f"✓ Created Rust project: {name}")
    print(f"  cd {name} && cargo run")
    return project


def _scaffold_python(name: str, base: Path) -> Path:
    print(f"Creating Python project: {name}")
    project = base / name
    package = project / "src" / name.replace("-", "_")
    package.mkdir(parents=True, exist_ok=True)
    (project / "tests").mkdir(parents=True, exist_ok=True)

    _write(project / ".gitignore", "*.pyc\n__pycache__/\n.env\n.venv/\n")
    _write(project / "requirements.txt", "")
    _write(
        project / "setup.py",
        "from setuptools import setup, find_packages\n"
        "\n"
        "setup(\n"
        f'    name="{name}",\n'
        '    version="0.1.0",\n'
        "    packages=find_packages(),\n"
        '    python_requires=">=3.8",\n'
        ")\n",
    )
    _write(package / "__init__.py", "")
    _write(project / "tests" / "__init__.py", "")
    _write(project / "README.md", f"# {name}\n\nA Python project.\n")

    print(f"✓ Created Python project: {name}")
    print(f"  cd {name} && python -m venv .venv")
    return project


def _scaffold_node(name: str, base: Path) -> Path:
    print(f"Creating Node.js project: {name}")
    project = base / name
    try:
        subprocess.run(["npm", "init", "-y"], cwd=project, capture_output=True, check=False)
    except OSError:
        project.mkdir(parents=True, exist_ok=True)
        _write(
            project / "package.json",
            "{\n"
            f'  "name": "{name}",\n'
            '  "version": "1.0.0",\n'
            '  "main": "index.js",\n'
            '  "scripts": {\n'
            '    "start": "node index.js",\n'
            '    "test": "jest"\n'
            "  }\n"
            "}\n",
        )
        _write(project / "index.js", "console.log('Hello, World!');\n")
        _write(project / ".gitignore", "node_modules/\n.env\n")
    print(f"✓ Created Node.js project: {name}")
    print(f"  cd {name} && npm install")
    return project


def _scaffold_web(name: str, base: Path) -> Path:
    print(f"Creating web project: {name}")
    project = base / name
    (project / "css").mkdir(parents=True, exist_ok=True)
    (project / "js").mkdir(parents=True, exist_ok=True)

    _write(
        project / "index.html",
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"    <title>{name}</title>\n"
        '    <link rel="stylesheet" href="css/style.css">\n'
        "</head>\n"
        "<body>\n"
        f"    <h1>{name}</h1>\n"
        '    <script src="js/main.js"></script>\n'
        "</body>\n"
        "</html>\n",
    )
    _write(
        project / "css" / "style.css",
        "* { margin: 0; padding: 0; box-sizing: border-box; }\n"
        "body { font-family: sans-serif; }\n",
    )
    _write(project / "js" / "main.js", "console.log('Hello, World!');\n")

    print(f"✓ Created web project: {name}")
    print(f"  Open {name}/index.html in your browser")
    return project


def _scaffold_go(name: str, base: Path) -> Path:
    print(f"Creating Go project: {name}")
    project = base / name
    project.mkdir(parents=True, exist_ok=True)

    _write(project / "go.mod", f"module {name}\n\ngo 1.21\n")
    _write(
        project / "main.go",
        "package main\n"
        "\n"
        'import "fmt"\n'
        "\n"
        "func main() {\n"
        '    fmt.Println("Hello, World!")\n'
        "}\n",
    )
    _write(project / ".gitignore", "*.exe\n*.exe~\n*.dll\n*.so\n*.dylib\n")

    print(f"✓ Created Go project: {name}")
    print(f"  cd {name} && go run main.go")
    return project


_BUILDERS: dict[str, Callable[[str, Path], Path | None]] = {
    "rust": _scaffold_rust,
    "rs": _scaffold_rust,
    "python": _scaffold_python,
    "py": _scaffold_python,
    "node": _scaffold_node,
    "js": _scaffold_node,
    "ts": _scaffold_node,
    "typescript": _scaffold_node,
    "web": _scaffold_web,
    "html": _scaffold_web,
    "go": _scaffold_go,
}


def scaffold(project_type: str, name: str, base_dir: str | Path | None = None) -> Path | None:
    """Create a new *project_type* project called *name* inside *base_dir*.

    Returns the project directory, or None for an unknown type or a failed
    ``cargo new``.
    """
    base = Path.cwd() if base_dir is None else Path(base_dir)
    print("Quantumn Code - Project Scaffolding")
    print(f"Type: {project_type}")
    print(f"Name: {name}")
    print()

    builder = _BUILDERS.get(project_type)
    if builder is None:
        print(f"Unknown project type: {project_type}")
        print(f"Available types: {AVAILABLE_TYPES}")
        return None
    return builder(name, base)