"""Extraction of tool calls from the XML-ish markup an assistant emits."""

from __future__ import annotations

from quantumn.tools import ToolCall

_OPEN = "<tool>"
_CLOSE = "</tool>"


def _extract_tag(xml: str, tag: str) -> str | None:
    """Return the trimmed text between ``<tag>`` and ``</tag>``, if present."""
    open_tag = f"<{tag}>"
    close_tag = f"</{tag}>"
    start = xml.find(open_tag)
    if start == -1:
        return None
    after_open = xml[start + len(open_tag):]
    end = after_open.find(close_tag)
    if end == -1:
        return None
    return after_open[:end].strip()


def parse_tool_calls(text: str) -> list[ToolCall]:
    """Return every complete ``<tool>...</tool>`` block in *text* as a ToolCall.

    Blocks without a ``<name>`` are skipped; an unterminated block ends parsing.
    """
    calls: list[ToolCall] = []
    remaining = text
    while (start := remaining.find(_OPEN)) != -1:
        after_start = remaining[start + len(_OPEN):]
        end = after_start.find(_CLOSE)
        if end == -1:
            break
        block = after_start[:end]
        name = _extract_tag(block, "name")
        if name is not None:
            calls.append(
                ToolCall(
                    name=name,
                    arg=_extract_tag(block, "arg") or "",
                    content=_extract_tag(block, "content"),
                )
            )
        remaining = after_start[end + len(_CLOSE):]
    return calls