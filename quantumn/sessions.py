"""Session commands: list, resume, save and delete saved conversations."""

from __future__ import annotations

from pathlib import Path

from quantumn.session import Session, default_sessions_dir

_ID_WIDTH = 38
_COLUMN_WIDTH = 20
_RULE_WIDTH = 80


def _sessions_dir(directory: str | Path | None) -> Path:
    return default_sessions_dir() if directory is None else Path(directory)


def list_sessions(directory: str | Path | None = None) -> list[Session]:
    """Print a table of the saved sessions and return them, newest first."""
    print("Quantumn Code - Sessions")
    print()

    sessions = Session.list_saved(directory)
    if not sessions:
        print("No sessions found.")
        print("Sessions are saved automatically in interactive mode.")
    else:
        print(f"{'ID':<{_ID_WIDTH}} {'Name':<{_COLUMN_WIDTH}} {'Updated':<{_COLUMN_WIDTH}}")
        print("-" * _RULE_WIDTH)
        for session in sessions:
            name = session.name or "unnamed"
            updated = (session.updated or session.created).strftime("%Y-%m-%d %H:%M")
            print(
                f"{session.id:<{_ID_WIDTH}} {name:<{_COLUMN_WIDTH}} "
                f"{updated:<{_COLUMN_WIDTH}}"
            )

    print("\nTo resume a session:")
    print("  quantumn session resume <id>")
    return sessions


def resume_session(
    session_id: str | None = None, directory: str | Path | None = None
) -> Session | None:
    """Load the session *session_id*, or the most recent one when it is None.

    Returns None when there is nothing to resume.
    """
    if session_id is None:
        sessions = Session.list_saved(directory)
        if not sessions:
            print("No sessions available to resume.")
            return None
        recent = sessions[0]
        print(f"Resuming most recent session: {recent.id}")
        return recent

    print(f"Resuming session: {session_id}.")
    try:
        session = Session.load(session_id, directory)
    except FileNotFoundError:
        print(f"Session not found: {session_id}")
        return None
    except ValueError as exc:
        print(f"Session {session_id} could not be read: {exc}")
        return None
    print("✓ Session data validated.")
    return session


def save_session(name: str | None = None, directory: str | Path | None = None) -> Session:
    """Create a new session called *name*, save it and return it."""
    session = Session(name=name)
    session.save(directory)
    print(f"✓ Session saved with ID: {session.id}")
    return session


def delete_session(session_id: str, directory: str | Path | None = None) -> bool:
    """Delete a saved session; return False when it does not exist."""
    print(f"Deleting session: {session_id}")
    path = _sessions_dir(directory) / f"{session_id}.json"
    try:
        path.unlink()
    except FileNotFoundError:
        print(f"Session not found: {session_id}")
        return False
    print(f"✓ Session deleted: {session_id}")
    return True