"""Conversation sessions: messages, files in context, and their storage on disk."""

from __future__ import annotations

import json
import os
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

DEFAULT_PROVIDER = "anthropic"
DEFAULT_MODEL = "claude-sonnet-4-20250514"

_FRACTION = re.compile(r"\.(\d+)")


def default_sessions_dir() -> Path:
    """Return the directory that holds saved sessions by default."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "quantumn-code" / "sessions"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(moment: datetime) -> str:
    text = moment.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def _parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, tolerating a ``Z`` suffix and extra digits."""
    normalized = text.strip()
    if normalized.endswith(("Z", "z")):
        normalized = normalized[:-1] + "+00:00"
    normalized = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), normalized, count=1)
    moment = datetime.fromisoformat(normalized)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def estimate_tokens(text: str) -> int:
    """Roughly estimate the token count of *text*: one token per four bytes."""
    return len(text.encode("utf-8")) // 4


@dataclass
class Message:
    """A single message of the conversation."""

    role: str
    content: str
    timestamp: datetime = field(default_factory=_now)
    tokens: int | None = None

    @property
    def token_estimate(self) -> int:
        """The known token count, or an estimate from the content."""
        return self.tokens if self.tokens is not None else estimate_tokens(self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": _format_time(self.timestamp),
            "tokens": self.tokens,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        return cls(
            role=data["role"],
            content=data["content"],
            timestamp=_parse_time(data["timestamp"]),
            tokens=data.get("tokens"),
        )


@dataclass
class FileContext:
    """A file placed in the conversation's context."""

    path: str
    content: str
    staged: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "content": self.content, "staged": self.staged}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileContext:
        return cls(path=data["path"], content=data["content"], staged=bool(data["staged"]))


@dataclass
class Session:
    """A conversation with its files, provider and model."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str | None = None
    created: datetime = field(default_factory=_now)
    updated: datetime | None = None
    messages: list[Message] = field(default_factory=list)
    files: dict[str, FileContext] = field(default_factory=dict)
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL

    def __post_init__(self) -> None:
        if self.updated is None:
            self.updated = self.created

    @classmethod
    def with_name(cls, name: str) -> Session:
        """Create a new session called *name*."""
        return cls(name=name)

    def add_message(self, role: str, content: str) -> Message:
        """Append a message and mark the session as updated."""
        message = Message(role=role, content=content)
        self.messages.append(message)
        self.updated = _now()
        return message

    def last_message(self) -> Message | None:
        """Return the most recent message, if any."""
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        """Drop every message and every file in context."""
        self.messages.clear()
        self.files.clear()

    def add_file(self, path: str, content: str) -> None:
        """Put a file into context, staged."""
        self.files[path] = FileContext(path=path, content=content, staged=True)

    def remove_file(self, path: str) -> None:
        """Take a file out of context; unknown paths are ignored."""
        self.files.pop(path, None)

    def toggle_file(self, path: str) -> None:
        """Flip whether a file in context is staged; unknown paths are ignored."""
        file = self.files.get(path)
        if file is not None:
            file.staged = not file.staged

    def total_tokens(self) -> int:
        """Sum the known token counts of the messages."""
        return sum(m.tokens for m in self.messages if m.tokens is not None)

    def enforce_context_budget(self, max_tokens: int) -> int:
        """Drop the oldest messages so the rest fit in *max_tokens*.

        Keeps the longest run of most recent messages that fits; returns the
        number of messages removed.
        """
        if not self.messages:
            return 0
        total = 0
        kept = 0
        for message in reversed(self.messages):
            tokens = message.token_estimate
            if total + tokens > max_tokens:
                break
            total += tokens
            kept += 1
        removed = len(self.messages) - kept
        if removed:
            self.messages = self.messages[removed:]
        return removed

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready representation."""
        return {
            "id": self.id,
            "name": self.name,
            "created": _format_time(self.created),
            "updated": _format_time(self.updated or self.created),
            "messages": [m.to_dict() for m in self.messages],
            "files": {path: f.to_dict() for path, f in self.files.items()},
            "provider": self.provider,
            "model": self.model,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        """Build a session from its JSON representation; raise ValueError if malformed."""
        try:
            return cls(
                id=data["id"],
                name=data.get("name"),
                created=_parse_time(data["created"]),
                updated=_parse_time(data["updated"]),
                messages=[Message.from_dict(m) for m in data["messages"]],
                files={
                    path: FileContext.from_dict(f) for path, f in data["files"].items()
                },
                provider=data["provider"],
                model=data["model"],
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Invalid session data: {exc}") from exc

    @staticmethod
    def _path(session_id: str, directory: str | Path | None) -> Path:
        base = default_sessions_dir() if directory is None else Path(directory)
        return base / f"{session_id}.json"

    def save(self, directory: str | Path | None = None) -> Path:
        """Write the session as JSON into *directory*; return the file's path."""
        path = self._path(self.id, directory)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, session_id: str, directory: str | Path | None = None) -> Session:
        """Read a saved session.

        Raises FileNotFoundError when it is missing and ValueError when malformed.
        """
        path = cls._path(session_id, directory)
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Invalid session data: not an object")
        return cls.from_dict(data)

    @classmethod
    def list_saved(cls, directory: str | Path | None = None) -> list[Session]:
        """Return every readable saved session, most recently updated first."""
        base = default_sessions_dir() if directory is None else Path(directory)
        sessions: list[Session] = []
        try:
            entries = list(base.iterdir())
        except OSError:
            return []
        for entry in entries:
            try:
                data = json.loads(entry.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    sessions.append(cls.from_dict(data))
            except (OSError, ValueError, UnicodeDecodeError):
                continue
        sessions.sort(key=lambda s: s.updated or s.created, reverse=True)
        return sessions