[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "quantumn"
version = "0.1.0"
description = "Toolkit for LLM coding agents: tool calling, agent loop, project scaffolding, sessions and git/test helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["ai", "agent", "llm", "tool-calling", "scaffolding", "coding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["quantumn*"]

[tool.pytest.ini_options]
addopts = "-ra"
