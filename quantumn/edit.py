"""Edit command: show a file and collect instructions for changing it."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_MODEL = "claude-sonnet-4-20250514"
PREVIEW_LINES = 20
_RULE = "-" * 40


@dataclass(frozen=True)
class EditRequest:
    """A file to edit, its current content and the instructions, if any."""

    path: Path
    content: str
    instructions: str | None


def _split_lines(content: str) -> list[str]:
    if not content:
        return []
    parts = content.split("\n")
    if content.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def preview_file(content: str, max_lines: int = PREVIEW_LINES) -> str:
    """Return the first *max_lines* lines, with a note on how many were left out."""
    lines = _split_lines(content)
    preview = "\n".join(lines[:max_lines])
    hidden = len(lines) - max_lines
    if hidden > 0:
        preview += f"\n... ({hidden} more lines)"
    return preview


def edit(
    file: str | Path, prompt: str | None = None, model: str | None = None
) -> EditRequest | None:
    """Show *file* and the edit instructions; return None if the file is missing."""
    path = Path(file)
    print("Quantumn Code - Edit Mode")
    print(f'File: "{path}"')
    print(f"Model: {model or DEFAULT_MODEL}")
    print()

    if not path.exists():
        print(f'File does not exist: "{path}"')
        return None

    with open(path, encoding="utf-8", newline="") as handle:
        content = handle.read()

    print(f"Current content ({len(content.encode('utf-8'))} bytes):")
    print(_RULE)
    print(preview_file(content))
    print(_RULE)
    print()

    if prompt is not None:
        print(f"Instructions: {prompt}")
        print()
    else:
        print("Enter your editing instructions:")
        print("(Type your instructions and press Enter, or 'cancel' to abort)")

    return EditRequest(path=path, content=content, instructions=prompt)