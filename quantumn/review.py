"""Code review: report on named files, or on the files staged in git."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MODEL = "claude-sonnet-4-20250514"


@dataclass(frozen=True)
class FileReview:
    """Size and line count of a reviewed file."""

    path: Path
    size: int
    lines: int


def _count_lines(content: str) -> int:
    if not content:
        return 0
    parts = content.split("\n")
    return len(parts) - 1 if content.endswith("\n") else len(parts)


def _quoted(path: Path) -> str:
    return f'"{path}"'


def review_file(file: str | Path) -> FileReview | None:
    """Report on one file; return None when it does not exist."""
    path = Path(file)
    if not path.exists():
        print(f"File not found: {_quoted(path)}")
        return None
    with open(path, encoding="utf-8", newline="") as handle:
        content = handle.read()
    result = FileReview(
        path=path, size=len(content.encode("utf-8")), lines=_count_lines(content)
    )
    print(f"Reviewing: {_quoted(path)}")
    print(f"  Size: {result.size} bytes")
    print(f"  Lines: {result.lines}")
    return result


def _staged_files() -> list[Path] | None:
    """Return the staged paths, or None when git cannot report them."""
    try:
        out = subprocess.run(
            ["git", "diff", "--cached", "--name-only"],
            capture_output=True,
            check=False,
        )
    except OSError:
        return None
    if out.returncode != 0:
        return None
    text = out.stdout.decode("utf-8", errors="replace")
    return [Path(line) for line in text.splitlines() if line]


def review(files: list[str | Path] | None = None, model: str | None = None) -> list[FileReview]:
    """Review *files*, or the staged changes when none are given.

    Returns the reports for the files that exist.
    """
    print("Quantumn Code - Code Review")
    print(f"Model: {model or DEFAULT_MODEL}")
    print()

    targets = [Path(f) for f in files or []]
    if not targets:
        print("No files specified. Reviewing staged changes...")
        staged = _staged_files()
        if staged is None:
            print("Not in a git repository or no staged changes.")
            return []
        if not staged:
            print("No staged changes to review.")
            return []
        targets = staged

    print("Files to review:")
    for path in targets:
        print(f"  - {_quoted(path)}")
    print()

    reports = [report for path in targets if (report := review_file(path)) is not None]
    print("\nReview complete.")
    return reports