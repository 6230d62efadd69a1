"""The agent loop: ask the model, run the tools it calls, feed results back."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from quantumn.parser import parse_tool_calls
from quantumn.prompt import (
    build_agent_system_prompt,
    build_agent_system_prompt_for_tools,
)
from quantumn.tools import ToolCall, ToolRegistry, ToolResult

MAX_ITERATIONS = 50

NO_ALLOWED_TOOLS_NOTE = (
    "Note: No allowed tools for this operation. Respond with suggestions instead."
)


class Role(Enum):
    """Who a chat message comes from."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ChatMessage:
    """One message of the conversation sent to a provider."""

    role: Role
    content: str
    name: str | None = None


@dataclass(frozen=True)
class StreamChunk:
    """A piece of a streamed response; ``done`` marks the last one."""

    content: str
    done: bool = False


class ProviderError(Exception):
    """A provider failed to produce a response."""


class AgentError(Exception):
    """The agent loop could not finish."""


class MaxIterationsExceededError(AgentError):
    """The loop ran more rounds than allowed."""

    def __init__(self, iterations: int) -> None:
        super().__init__(
            f"Max iterations ({iterations}) exceeded. "
            "The AI may be in an infinite loop."
        )
        self.iterations = iterations


class Provider(Protocol):
    """Anything that streams a response to a list of messages."""

    def send_stream(self, messages: list[ChatMessage]) -> Iterable[StreamChunk]: ...


def _same_name(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def _format_result(call: ToolCall, result: ToolResult) -> str:
    return (
        f"\n[Tool: {call.name}]\nstdout:\n{result.stdout}\nstderr:\n{result.stderr}"
        f"\nsuccess: {str(result.success).lower()}\n"
    )


class AgentExecutor:
    """Runs the tool-calling loop for one user request."""

    def __init__(
        self,
        user_message: str,
        cwd: str | None = None,
        allowed_tools: Sequence[str] | None = None,
        tool_registry: ToolRegistry | None = None,
    ) -> None:
        self.tool_registry = tool_registry or ToolRegistry()
        self.cwd = os.getcwd() if cwd is None else cwd
        self.allowed_tools = None if allowed_tools is None else list(allowed_tools)
        self.iteration = 0
        self._prompt_prepared = False
        self.messages: list[ChatMessage] = [
            ChatMessage(Role.SYSTEM, build_agent_system_prompt(self.tool_registry)),
            ChatMessage(Role.USER, user_message),
        ]

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        """The conversation so far."""
        return tuple(self.messages)

    def _prepare_prompt(self) -> None:
        if self._prompt_prepared:
            return
        self._prompt_prepared = True
        if self.allowed_tools is not None and self.messages:
            self.messages[0].content = build_agent_system_prompt_for_tools(
                self.tool_registry, self.allowed_tools
            )

    def _is_allowed(self, call: ToolCall) -> bool:
        if self.allowed_tools is None:
            return True
        return any(_same_name(name, call.name) for name in self.allowed_tools)

    def _get_ai_response(self, provider: Provider) -> str:
        parts: list[str] = []
        for chunk in provider.send_stream(list(self.messages)):
            print(chunk.content, end="", flush=True)
            parts.append(chunk.content)
            if chunk.done:
                break
        print()
        return "".join(parts)

    def run(self, provider: Provider) -> str:
        """Loop until the model answers without calling a tool; return that answer.

        Raises MaxIterationsExceededError after too many rounds and AgentError
        when the provider fails.
        """
        self._prepare_prompt()
        while True:
            self.iteration += 1
            if self.iteration > MAX_ITERATIONS:
                raise MaxIterationsExceededError(MAX_ITERATIONS)

            try:
                response = self._get_ai_response(provider)
            except ProviderError as exc:
                raise AgentError(f"AI provider error: {exc}") from exc

            self.messages.append(ChatMessage(Role.ASSISTANT, response))

            calls = parse_tool_calls(response)
            if not calls:
                return response

            permitted = [call for call in calls if self._is_allowed(call)]
            if not permitted:
                self.messages.append(ChatMessage(Role.USER, NO_ALLOWED_TOOLS_NOTE))
                continue

            for call in permitted:
                result = self.tool_registry.execute_tool(call)
                self.messages.append(ChatMessage(Role.USER, _format_result(call, result)))


def run_agentic(
    prompt: str, provider: Provider, allowed_tools: Sequence[str] | None = None
) -> str:
    """Run one agentic request from the current directory and return the answer."""
    executor = AgentExecutor(prompt, os.getcwd(), allowed_tools)
    return executor.run(provider)