"""Tool calling, agent loop, scaffolding, sessions and project helpers for coding agents."""

__version__ = "0.1.0"