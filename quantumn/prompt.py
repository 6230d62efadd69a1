"""System prompt for the agent, with tool metadata filled in."""

from __future__ import annotations

from collections.abc import Iterable

from quantumn.tools import ToolRegistry

AGENT_SYSTEM_PROMPT = """Quantumn Code agent.
Goal: finish the user's coding task with minimum context, tokens, and tool calls while preserving correctness.
Policy: inspect before edits; prefer Glob/Grep then Read; obey router tool policy; never use blocked tools; avoid destructive shell/write/delete unless explicit; preserve unrelated user changes; verify when feasible.
Tools:
{{TOOLS_LIST}}
{{TOOL_CALL_FORMAT}}
Final answer: concise changed files, verification, and residual risk."""


def build_agent_system_prompt(tool_registry: ToolRegistry) -> str:
    """Build the agent prompt advertising every registered tool."""
    return build_agent_system_prompt_for_tools(tool_registry, None)


def build_agent_system_prompt_for_tools(
    tool_registry: ToolRegistry, allowed_tools: Iterable[str] | None
) -> str:
    """Build the agent prompt advertising only the tools in *allowed_tools*."""
    allowed = None if allowed_tools is None else list(allowed_tools)
    tools = tool_registry.list_tools_for(allowed)
    call_format = tool_registry.tool_call_format_for(allowed)
    return AGENT_SYSTEM_PROMPT.replace("{{TOOLS_LIST}}", tools.rstrip()).replace(
        "{{TOOL_CALL_FORMAT}}", call_format.strip()
    )