"""Git helpers and the commit-message command."""

from __future__ import annotations

import subprocess

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DIFF_PREVIEW_LINES = 50
_RULE = "-" * 40


def _git(*args: str) -> subprocess.CompletedProcess[bytes]:
    return subprocess.run(["git", *args], capture_output=True, check=False)


def _stdout(*args: str) -> str:
    return _git(*args).stdout.decode("utf-8", errors="replace")


def get_git_status() -> str:
    """Return ``git status --short``."""
    return _stdout("status", "--short")


def get_git_diff() -> str:
    """Return the staged and unstaged diff statistics."""
    cached = _stdout("diff", "--cached", "--stat")
    unstaged = _stdout("diff", "--stat")
    return f"Staged:\n{cached}\n\nUnstaged:\n{unstaged}"


def get_git_log(count: int) -> str:
    """Return the last *count* commits, one line each."""
    return _stdout("log", f"-{count}", "--oneline")


def _in_work_tree() -> bool:
    try:
        return _git("rev-parse", "--is-inside-work-tree").returncode == 0
    except OSError:
        return False


def commit(message: str | None = None, model: str | None = None) -> str | None:
    """Show the pending changes and the commit to make.

    Returns the ``git commit`` command line when *message* is given, otherwise
    None; also None outside a repository or with nothing to commit.
    """
    print("Quantumn Code - Git Commit")
    print(f"Model: {model or DEFAULT_MODEL}")
    print()

    if not _in_work_tree():
        print("Not in a git repository.")
        return None

    print("Git Status:")
    print(get_git_status())
    print()

    diff = get_git_diff()
    if not diff:
        print("No changes to commit.")
        return None

    lines = diff.splitlines()
    print("Changes:")
    print(_RULE)
    print("\n".join(lines[:DIFF_PREVIEW_LINES]))
    if len(lines) > DIFF_PREVIEW_LINES:
        print(f"... ({len(lines) - DIFF_PREVIEW_LINES} more lines)")
    print(_RULE)
    print()

    if message is None:
        print("Suggested format:")
        print("  type(scope): description")
        print("\nTypes: feat, fix, docs, style, refactor, test, chore")
        return None

    command = f'git commit -m "{message}"'
    print(f"Using custom message: {message}")
    print(f"\nCommit message: {message}")
    print("\nTo commit, run:")
    print(f"  {command}")
    return command