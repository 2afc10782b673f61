"""Tools exposed to the agent."""

from __future__ import annotations

from serpwright.tools.executor import ToolCall, ToolCallResult, ToolExecutor
from serpwright.tools.registry import (
    DuplicateToolError,
    FunctionTool,
    RegistryFrozenError,
    Tool,
    ToolDescriptor,
    ToolNotFoundError,
    ToolParameter,
    ToolRegistry,
    ToolResult,
    ToolSet,
)
from serpwright.tools.web import WebSearchTools, build_search_url, truncate_body

__all__ = [
    "Tool",
    "ToolSet",
    "ToolResult",
    "ToolDescriptor",
    "ToolParameter",
    "ToolRegistry",
    "FunctionTool",
    "ToolExecutor",
    "ToolCall",
    "ToolCallResult",
    "ToolNotFoundError",
    "DuplicateToolError",
    "RegistryFrozenError",
    "WebSearchTools",
    "build_search_url",
    "truncate_body",
]
