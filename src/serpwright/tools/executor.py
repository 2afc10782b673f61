"""Tool call executor for parsing and executing tool calls from agent output."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from serpwright.logging import get_logger
from serpwright.tools.registry import ToolRegistry, ToolResult

logger = get_logger(__name__)

_TOOL_CALL_OPEN = "<tool_call>"
_TOOL_CALL_CLOSE = "</tool_call>"
_TOOL_CALL_RE = re.compile(
    r"{}\s*(?P<json>\{{.*?\}})\s*{}".format(_TOOL_CALL_OPEN, _TOOL_CALL_CLOSE),
    re.DOTALL,
)


@dataclass
class ToolCall:
    """Represents a tool call request."""

    name: str
    arguments: dict[str, Any]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ToolCall:
        """Create ToolCall from dictionary."""
        arguments = data.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise ValueError("tool call arguments must be a JSON object")
        return cls(name=str(data.get("name") or ""), arguments=arguments)


@dataclass
class ToolCallResult:
    """Result of executing a tool call."""

    tool_call: ToolCall
    result: ToolResult
    formatted_response: str


class ToolExecutor:
    """Executor for parsing and executing tool calls."""

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    def parse_tool_calls(self, text: str) -> list[ToolCall]:
        """Parse tool calls from agent output.

        Malformed blocks are logged and skipped.

        Args:
            text: Agent output text.

        Returns:
            List of parsed ToolCall objects, in order of appearance.
        """
        tool_calls: list[ToolCall] = []
        for match in _TOOL_CALL_RE.finditer(text):
            json_str = match.group("json")
            try:
                data = json.loads(json_str)
                tool_call = ToolCall.from_dict(data)
            except ValueError as e:
                logger.warning(
                    "Failed to parse tool call",
                    extra={"raw": json_str[:200], "error": str(e)},
                )
                continue
            if tool_call.name:
                tool_calls.append(tool_call)
        return tool_calls

    def execute_tool_call(self, tool_call: ToolCall) -> ToolCallResult:
        """Execute a single tool call.

        Args:
            tool_call: Tool call to execute.

        Returns:
            ToolCallResult with execution result.
        """
        result = self._registry.execute(tool_call.name, tool_call.arguments)
        formatted = self.format_tool_response(tool_call.name, result)
        return ToolCallResult(tool_call=tool_call, result=result, formatted_response=formatted)

    @staticmethod
    def format_tool_response(tool_name: str, result: ToolResult) -> str:
        """Format tool result for agent consumption.

        Args:
            tool_name: Name of the tool.
            result: Tool execution result.

        Returns:
            Formatted response string.
        """
        parts: list[str] = []
        parts.append("<tool_response>")
        parts.append(f"<tool>{tool_name}</tool>")
        if result.success:
            if isinstance(result.content, (dict, list)):
                parts.append("<result>")
                parts.append(json.dumps(result.content, ensure_ascii=False, indent=2))
                parts.append("</result>")
            elif result.content:
                parts.append("<result>")
                parts.append(str(result.content))
                parts.append("</result>")
            else:
                parts.append("<result>success</result>")
        else:
            parts.append("<error>")
            parts.append(result.error or "Unknown error")
            status_code = result.metadata.get("status_code")
            if status_code is not None:
                parts.append(f"(HTTP status {status_code})")
            parts.append("</error>")
        parts.append("</tool_response>")
        return "\n".join(parts)
