"""Agent driving the web tools."""

from __future__ import annotations

from serpwright.agents.runner import (
    Agent,
    AgentConfig,
    AgentError,
    AgentIterationLimitError,
    ChatModel,
    extract_answer,
    render_tool_catalog,
)

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentError",
    "AgentIterationLimitError",
    "ChatModel",
    "extract_answer",
    "render_tool_catalog",
]
