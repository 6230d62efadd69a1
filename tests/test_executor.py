import pytest

from quantumn.executor import (
    MAX_ITERATIONS,
    NO_ALLOWED_TOOLS_NOTE,
    AgentError,
    AgentExecutor,
    ChatMessage,
    MaxIterationsExceededError,
    ProviderError,
    Role,
    StreamChunk,
    run_agentic,
)


class ScriptedProvider:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = 0
        self.seen = []

    def send_stream(self, messages):
        self.seen.append(list(messages))
        response = self.responses[min(self.calls, len(self.responses) - 1)]
        self.calls += 1
        return [StreamChunk(response, done=True)]


class FailingProvider:
    def send_stream(self, messages):
        raise ProviderError("boom")


def test_plain_answer_returns_immediately():
    provider = ScriptedProvider(["All good."])
    executor = AgentExecutor("hello", "/tmp")
    assert executor.run(provider) == "All good."
    assert provider.calls == 1
    history = executor.history
    assert history[0].role is Role.SYSTEM
    assert history[1] == ChatMessage(Role.USER, "hello")
    assert history[-1] == ChatMessage(Role.ASSISTANT, "All good.")


def test_tool_result_is_fed_back(tmp_path):
    target = tmp_path / "note.txt"
    target.write_text("file body", encoding="utf-8")
    provider = ScriptedProvider(
        [f"<tool><name>Read</name><arg>{target}</arg></tool>", "finished"]
    )
    executor = AgentExecutor("read it", str(tmp_path))
    assert executor.run(provider) == "finished"
    tool_messages = [
        m for m in executor.history if m.role is Role.USER and "[Tool: Read]" in m.content
    ]
    assert len(tool_messages) == 1
    assert "file body" in tool_messages[0].content
    assert "success: true" in tool_messages[0].content


def test_disallowed_tools_add_note():
    provider = ScriptedProvider(
        ["<tool><name>Write</name><arg>x</arg><content>y</content></tool>", "suggestion"]
    )
    executor = AgentExecutor("task", "/tmp", allowed_tools=["Read", "Grep"])
    assert executor.run(provider) == "suggestion"
    contents = [m.content for m in executor.history]
    assert NO_ALLOWED_TOOLS_NOTE in contents
    system = executor.history[0].content
    assert "Read(" in system
    assert "Write(" not in system


def test_chunks_after_done_are_ignored():
    class ChunkedProvider:
        def send_stream(self, messages):
            yield StreamChunk("Hel")
            yield StreamChunk("lo", done=True)
            yield StreamChunk(" ignored")

    executor = AgentExecutor("hi", "/tmp")
    assert executor.run(ChunkedProvider()) == "Hello"


def test_max_iterations(tmp_path):
    missing = tmp_path / "missing.txt"
    provider = ScriptedProvider([f"<tool><name>Read</name><arg>{missing}</arg></tool>"])
    executor = AgentExecutor("loop", str(tmp_path))
    with pytest.raises(MaxIterationsExceededError) as info:
        executor.run(provider)
    assert info.value.iterations == MAX_ITERATIONS
    assert provider.calls == MAX_ITERATIONS


def test_provider_error_wrapped():
    executor = AgentExecutor("x", "/tmp")
    with pytest.raises(AgentError) as info:
        executor.run(FailingProvider())
    assert isinstance(info.value.__cause__, ProviderError)
    assert "boom" in str(info.value)


def test_run_agentic_returns_answer():
    provider = ScriptedProvider(["answer"])
    assert run_agentic("question", provider) == "answer"
    assert provider.seen[0][-1].content == "question"