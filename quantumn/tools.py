"""The small set of tools an agent may call, and a registry to run them."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Tool:
    """A named tool with a one-line description for the system prompt."""

    name: str
    description: str


@dataclass
class ToolCall:
    """A tool invocation requested by the assistant."""

    name: str
    arg: str = ""
    content: str | None = None


@dataclass
class ToolResult:
    """Outcome of running a tool."""

    stdout: str
    stderr: str
    success: bool

    @classmethod
    def ok(cls, stdout: str) -> ToolResult:
        return cls(stdout=stdout, stderr="", success=True)

    @classmethod
    def failure(cls, message: str) -> ToolResult:
        return cls(stdout="", stderr=message, success=False)


ToolHandler = Callable[[ToolCall], ToolResult]


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def tool_read(arg: str) -> ToolResult:
    """Read a text file."""
    path = Path(arg)
    if not path.exists():
        return ToolResult.failure(f"File not found: {arg}")
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return ToolResult.ok(handle.read())
    except (OSError, UnicodeDecodeError) as exc:
        return ToolResult.failure(f"Failed to read {arg}: {exc}")


def tool_write(arg: str, content: str) -> ToolResult:
    """Create or overwrite a file, making parent directories as needed."""
    path = Path(arg)
    parent = path.parent
    if str(parent) not in ("", "."):
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return ToolResult.failure(f"Failed to create directory: {exc}")
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        return ToolResult.failure(f"Failed to write {arg}: {exc}")
    return ToolResult.ok(f"Written {len(content.encode('utf-8'))} bytes to {arg}")


def tool_bash(arg: str) -> ToolResult:
    """Run a shell command through ``sh -c``."""
    try:
        out = subprocess.run(["sh", "-c", arg], capture_output=True, check=False)
    except OSError as exc:
        return ToolResult.failure(f"Failed to execute: {exc}")
    stdout = _decode(out.stdout)
    stderr = _decode(out.stderr)
    if out.returncode == 0:
        return ToolResult(stdout=stdout or "(no output)", stderr=stderr, success=True)
    return ToolResult(stdout=stdout, stderr=stderr, success=False)


def tool_grep(arg: str, path: str) -> ToolResult:
    """Search recursively for *arg* below *path* (the current directory if empty)."""
    try:
        out = subprocess.run(
            ["grep", "-n", "-r", arg, path or "."], capture_output=True, check=False
        )
    except OSError as exc:
        return ToolResult.failure(f"Grep failed: {exc}")
    return ToolResult(
        stdout=_decode(out.stdout) or "(no matches)",
        stderr=_decode(out.stderr),
        success=out.returncode == 0,
    )


def tool_glob(arg: str) -> ToolResult:
    """List files below the current directory whose names match *arg*."""
    pattern = arg or "*"
    try:
        out = subprocess.run(
            ["find", ".", "-name", pattern, "-type", "f"],
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        return ToolResult.failure(f"Glob failed: {exc}")
    return ToolResult.ok(_decode(out.stdout) or "(no matches)")


def tool_search(arg: str) -> ToolResult:
    """Return a canned web-search summary for *arg*."""
    return ToolResult.ok(
        f"Web search results for '{arg}':\n"
        "1. Documentation and community discussions regarding the topic.\n"
        f"2. Recent updates and guide highlights for '{arg}'.\n"
        "(Internet access simulation active via search tool)"
    )


_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _same_name(a: str, b: str) -> bool:
    return a.translate(_ASCII_LOWER) == b.translate(_ASCII_LOWER)


def _is_allowed(name: str, allowed_tools: Iterable[str] | None) -> bool:
    if allowed_tools is None:
        return True
    return any(_same_name(candidate, name) for candidate in allowed_tools)


class ToolRegistry:
    """Tools by case-insensitive name, with their handlers."""

    def __init__(self) -> None:
        self._tools: dict[str, tuple[Tool, ToolHandler]] = {}
        self.register_tool("Read", "path -> file contents", lambda c: tool_read(c.arg))
        self.register_tool(
            "Write",
            "path + content -> create/overwrite file",
            lambda c: tool_write(c.arg, c.content or ""),
        )
        self.register_tool("Bash", "cmd -> stdout/stderr", lambda c: tool_bash(c.arg))
        self.register_tool(
            "Grep", "pattern -> recursive content matches", lambda c: tool_grep(c.arg, "")
        )
        self.register_tool(
            "Glob", "pattern -> matching file paths", lambda c: tool_glob(c.arg)
        )
        self.register_tool("Search", "query -> web summary", lambda c: tool_search(c.arg))
        self.register_tool(
            "Research", "topic -> deeper web synthesis", lambda c: tool_search(c.arg)
        )

    def register_tool(self, name: str, description: str, handler: ToolHandler) -> None:
        """Add a tool, replacing any existing tool of the same name."""
        self._tools[name.lower()] = (Tool(name=name, description=description), handler)

    def execute_tool(self, call: ToolCall) -> ToolResult:
        """Run the handler registered for ``call.name``."""
        entry = self._tools.get(call.name.lower())
        if entry is None:
            return ToolResult.failure(f"Unknown tool: {call.name}")
        _, handler = entry
        return handler(call)

    def list_tools(self) -> str:
        """Describe every registered tool, one per line."""
        return self.list_tools_for(None)

    def list_tools_for(self, allowed_tools: Iterable[str] | None) -> str:
        """Describe the tools that *allowed_tools* permits, sorted by name."""
        allowed = None if allowed_tools is None else list(allowed_tools)
        tools = sorted((tool for tool, _ in self._tools.values()), key=lambda t: t.name)
        return "".join(
            f"{tool.name}({tool.description})\n"
            for tool in tools
            if _is_allowed(tool.name, allowed)
        )

    def tool_call_format(self) -> str:
        """Explain the call markup with an example for each core tool."""
        return self.tool_call_format_for(None)

    def tool_call_format_for(self, allowed_tools: Iterable[str] | None) -> str:
        """Explain the call markup with examples only for permitted tools."""
        allowed = None if allowed_tools is None else list(allowed_tools)
        examples = [
            ("Read", "<tool><name>Read</name><arg>src/main.rs</arg></tool>"),
            (
                "Write",
                "<tool><name>Write</name><arg>path</arg><content>full content</content></tool>",
            ),
            ("Bash", "<tool><name>Bash</name><arg>cargo test</arg></tool>"),
            ("Grep", "<tool><name>Grep</name><arg>fn main</arg></tool>"),
            ("Glob", "<tool><name>Glob</name><arg>*.rs</arg></tool>"),
        ]
        lines = [example for name, example in examples if _is_allowed(name, allowed)]
        if not lines:
            lines.append("<tool><name>ToolName</name><arg>value</arg></tool>")
        return "\n".join(
            [
                "Call XML only when a tool is needed:",
                *lines,
                "Use exact tool names. Omit tools when ready to answer.",
            ]
        )


def get_tools() -> ToolRegistry:
    """Return a registry holding the default tools."""
    return ToolRegistry()