# quantumn

Building blocks for a language-model coding agent that works on a local
project:

- `quantumn.parser` and `quantumn.tools`: a small XML call format and a
  registry of tools (`Read`, `Write`, `Bash`, `Grep`, `Glob`, `Search`,
  `Research`) that a model can call;
- `quantumn.prompt`: the agent's system prompt, listing only the tools it may
  use;
- `quantumn.executor`: the loop that asks a model, runs the tools it calls
  and feeds the results back;
- `quantumn.scaffold`: new Rust, Python, Node.js, web and Go projects;
- `quantumn.session` and `quantumn.sessions`: conversations saved as JSON,
  with token budgeting;
- `quantumn.testrunner`, `quantumn.review`, `quantumn.edit` and
  `quantumn.git`: helpers that run a project's tests, report on files and
  summarise git changes.

Python 3.10 or later is required. There are no third-party dependencies.
`Bash`, `Grep` and `Glob` run `sh`, `grep` and `find`, so those tools need a
POSIX system.

## Installation

```
pip install .
```

## Tool calls

A model asks for a tool by writing XML in its reply:

```
<tool><name>Read</name><arg>src/main.rs</arg></tool>
<tool><name>Write</name><arg>notes.txt</arg><content>hello</content></tool>
```

```python
from quantumn.parser import parse_tool_calls
from quantumn.tools import get_tools

registry = get_tools()
for call in parse_tool_calls(reply_text):
    result = registry.execute_tool(call)
    print(result.success, result.stdout or result.stderr)
```

Blocks without a `<name>` are skipped, and an unterminated `<tool>` block ends
parsing. Tool names are matched case-insensitively; an unknown name yields a
failed `ToolResult` rather than an exception. `ToolRegistry.register_tool`
adds or replaces a tool. `Search` and `Research` return a canned summary; they
do not go to the network.

## Agent prompt and loop

```python
from quantumn.prompt import build_agent_system_prompt_for_tools
from quantumn.tools import ToolRegistry

prompt = build_agent_system_prompt_for_tools(ToolRegistry(), ["Read", "Grep"])
```

Only the allowed tools are listed, with call examples for them.

`AgentExecutor(user_message, cwd=None, allowed_tools=None, tool_registry=None)`
runs the loop with `run(provider)`. A provider is any object with a
`send_stream(messages)` method that takes a list of `ChatMessage` and yields
`StreamChunk` values; the streamed text is printed as it arrives. The loop ends
when a reply calls no tools and returns that reply. Calls to tools outside
`allowed_tools` are dropped. A `ProviderError` from the provider is raised as
`AgentError`, and more than 50 rounds raise `MaxIterationsExceededError`.
`run_agentic(prompt, provider, allowed_tools=None)` does the same from the
current directory.

## Scaffolding

```python
from quantumn.scaffold import scaffold

scaffold("python", "my-app", base_dir=".")
```

Types: `rust`/`rs` (runs `cargo new`), `python`/`py`, `node`/`js`/`ts`/
`typescript` (runs `npm init -y`, writing the files itself if npm cannot
start), `web`/`html` and `go`. It returns the project directory, or `None`
for an unknown type or a failed `cargo new`.

## Sessions

```python
from quantumn.session import Session

session = Session.with_name("feature-x")
session.add_message("user", "Explain this function")
session.enforce_context_budget(4000)
path = session.save(directory)
restored = Session.load(session.id, directory)
```

`enforce_context_budget` keeps the most recent messages that fit and returns
how many were dropped. Token counts a message does not carry are estimated at
one token per four bytes of UTF-8 text. `Session.load` raises
`FileNotFoundError` for a missing session and `ValueError` for a malformed
one; `Session.list_saved` returns the readable sessions, most recently updated
first. Without a directory, sessions live in
`$XDG_CONFIG_HOME/quantumn-code/sessions` (or `~/.config/quantumn-code/sessions`).

`quantumn.sessions` prints and returns: `list_sessions`, `resume_session`,
`save_session` and `delete_session`.

## Project helpers

- `detect_test_command(directory)` picks `cargo test`, `npm test`,
  `go test ./...` or `pytest` from the files present; `run_tests(path, model)`
  runs it and returns a `TestRun`.
- `review(files, model)` reports size and line count for the given files, or
  for the files staged in git.
- `edit(file, prompt, model)` shows a preview of a file and returns an
  `EditRequest`; `preview_file(content, max_lines)` builds the preview.
- `get_git_status()`, `get_git_diff()`, `get_git_log(count)` and
  `commit(message, model)`, which returns the `git commit` command line to run.

## What this package does not do

It installs no command and has no interactive screen. It holds no clients for
model services: you supply the provider object that `AgentExecutor` talks to.
The `model` arguments of the helpers are only printed; no model reviews,
edits or writes commit messages. There is no configuration file or theme
handling.

## Running the tests

```
pip install ".[test]"
pytest
```