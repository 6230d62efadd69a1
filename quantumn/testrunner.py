"""Test runner: detect the project's test command and run it."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MODEL = "claude-sonnet-4-20250514"


@dataclass(frozen=True)
class TestRun:
    """Outcome of running a project's tests."""

    __test__ = False

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def passed(self) -> bool:
        return self.returncode == 0


def detect_test_command(directory: str | Path | None = None) -> tuple[str, list[str]]:
    """Return the program and arguments that run the tests in *directory*."""
    base = Path.cwd() if directory is None else Path(directory)
    if (base / "Cargo.toml").exists():
        return "cargo", ["test"]
    if (base / "package.json").exists():
        return "npm", ["test"]
    if (base / "go.mod").exists():
        return "go", ["test", "./..."]
    if (base / "pytest.ini").exists() or (base / "setup.py").exists():
        return "pytest", []
    return "cargo", ["test"]


def run_tests(path: str | Path | None = None, model: str | None = None) -> TestRun | None:
    """Run the detected test command in *path*; return None if it cannot start."""
    print("Quantumn Code - Test Runner")
    print(f"Model: {model or DEFAULT_MODEL}")
    print()

    program, args = detect_test_command()
    print(f"Detected test command: {program} {' '.join(args)}")
    print()

    print("Running tests...")
    workdir = Path.cwd() if path is None else Path(path)
    command = (program, *args)
    try:
        out = subprocess.run(list(command), cwd=workdir, capture_output=True, check=False)
    except OSError as exc:
        print(f"Failed to run tests: {exc}")
        print("Make sure you have the appropriate test runner installed.")
        return None

    result = TestRun(
        command=command,
        returncode=out.returncode,
        stdout=out.stdout.decode("utf-8", errors="replace"),
        stderr=out.stderr.decode("utf-8", errors="replace"),
    )
    print(result.stdout)
    if result.stderr:
        print(f"Errors:\n{result.stderr}")
    if result.passed:
        print("\n✓ All tests passed!")
    else:
        print("\n✗ Some tests failed.")
    return result