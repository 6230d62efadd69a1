from quantumn.prompt import build_agent_system_prompt, build_agent_system_prompt_for_tools
from quantumn.tools import ToolRegistry


def test_agent_prompt_is_injected_and_compact():
    prompt = build_agent_system_prompt(ToolRegistry())
    assert "Read(" in prompt
    assert "<tool><name>Read</name>" in prompt
    assert "{{" not in prompt
    assert len(prompt.encode()) < 1400


def test_agent_prompt_respects_allowed_tools():
    prompt = build_agent_system_prompt_for_tools(ToolRegistry(), ["Read", "Grep"])
    assert "Read(" in prompt
    assert "Grep(" in prompt
    assert "Write(" not in prompt
    assert "<tool><name>Write</name>" not in prompt


def test_prompt_keeps_frame_lines():
    prompt = build_agent_system_prompt(ToolRegistry())
    lines = prompt.splitlines()
    assert lines[0] == "Quantumn Code agent."
    assert lines[-1] == "Final answer: concise changed files, verification, and residual risk."
    assert lines[lines.index("Tools:") + 1].startswith("Bash(")


def test_none_allowed_matches_unfiltered():
    registry = ToolRegistry()
    assert build_agent_system_prompt_for_tools(registry, None) == build_agent_system_prompt(
        registry
    )