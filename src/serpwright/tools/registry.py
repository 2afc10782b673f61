"""Tool registry.

Tools are explicit values: a :class:`ToolDescriptor` (name, description, parameters) plus a
callable. A :class:`ToolRegistry` is filled once at startup, frozen, and then only read by the
agent loop.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol

from pydantic import BaseModel, Field

from serpwright.gateway import ProviderError
from serpwright.logging import get_logger

logger = get_logger(__name__)


class ToolResult(BaseModel):
    """Result from a tool execution."""

    success: bool = True
    content: str | dict | list | None = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class ToolParameter:
    """One named argument of a tool."""

    name: str
    type: str
    description: str


@dataclass(frozen=True)
class ToolDescriptor:
    """What the agent loop is told about a tool."""

    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = field(default_factory=tuple)

    def json_schema(self) -> dict[str, Any]:
        """JSON schema for the tool arguments. Every parameter is required."""

        return {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description} for p in self.parameters
            },
            "required": [p.name for p in self.parameters],
        }


class Tool(ABC):
    """Base class for tools."""

    @property
    @abstractmethod
    def descriptor(self) -> ToolDescriptor:
        """Tool name, description and parameters."""

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def description(self) -> str:
        return self.descriptor.description

    @abstractmethod
    def invoke(self, **kwargs: Any) -> Any:
        """Run the tool.

        Errors propagate to the caller.
        """


class FunctionTool(Tool):
    """Tool wrapper for a Python function."""

    def __init__(self, descriptor: ToolDescriptor, func: Callable[..., Any]) -> None:
        self._descriptor = descriptor
        self._func = func

    @property
    def descriptor(self) -> ToolDescriptor:
        return self._descriptor

    def invoke(self, **kwargs: Any) -> Any:
        expected = {p.name for p in self._descriptor.parameters}
        missing = sorted(expected - kwargs.keys())
        unexpected = sorted(kwargs.keys() - expected)
        if missing or unexpected:
            raise TypeError(
                f"Tool '{self.name}' got bad arguments "
                f"(missing: {missing or 'none'}, unexpected: {unexpected or 'none'})"
            )
        return self._func(**kwargs)


class ToolSet(Protocol):
    """Anything that hands out a fixed list of tools."""

    def tools(self) -> list[Tool]:
        ...


class ToolRegistryError(RuntimeError):
    pass


class DuplicateToolError(ToolRegistryError):
    pass


class RegistryFrozenError(ToolRegistryError):
    pass


class ToolNotFoundError(KeyError):
    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(name)

    def __str__(self) -> str:
        return f"Tool '{self.name}' not found. Available tools: {', '.join(self.available) or '<none>'}"


class ToolRegistry:
    """Registry for managing tools."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._frozen = False

    @classmethod
    def build(cls, *items: Tool | ToolSet) -> ToolRegistry:
        """Register every item and freeze the result."""

        registry = cls()
        for item in items:
            registry.register(item)
        registry.freeze()
        return registry

    def register(self, item: Tool | ToolSet) -> None:
        """Register a tool, or every tool of a tool set.

        Raises:
            RegistryFrozenError: If the registry is already frozen.
            DuplicateToolError: If a tool name is already taken.
        """
        if self._frozen:
            raise RegistryFrozenError("Tool registry is frozen; tools are registered at startup only")

        tools = [item] if isinstance(item, Tool) else list(item.tools())
        names = [tool.name for tool in tools]
        for name in names:
            if name in self._tools or names.count(name) > 1:
                raise DuplicateToolError(f"Duplicate tool name detected: {name}")

        for tool in tools:
            self._tools[tool.name] = tool
            logger.debug("Tool registered", extra={"tool": tool.name})

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Tool:
        """Get a tool by name.

        Raises:
            ToolNotFoundError: If no tool has that name.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name, self._tools.keys())
        return tool

    def list_tools(self) -> list[ToolDescriptor]:
        """Descriptors of all registered tools, in registration order."""

        return [tool.descriptor for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def execute(self, tool_name: str, arguments: dict[str, Any]) -> ToolResult:
        """Execute a tool on behalf of the agent loop.

        Any failure is returned as an unsuccessful :class:`ToolResult` so the loop can decide
        what to do next.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Tool arguments.

        Returns:
            ToolResult with execution result.
        """
        try:
            tool = self.lookup(tool_name)
        except ToolNotFoundError as e:
            logger.warning("Unknown tool requested", extra={"tool": tool_name})
            return ToolResult(success=False, error=str(e), metadata={"error_type": type(e).__name__})

        try:
            result = tool.invoke(**arguments)
        except Exception as e:
            logger.exception("Tool execution failed", extra={"tool": tool_name})
            metadata: dict[str, Any] = {"error_type": type(e).__name__}
            if isinstance(e, ProviderError):
                metadata["status_code"] = e.status_code
            return ToolResult(success=False, error=str(e), metadata=metadata)

        if isinstance(result, ToolResult):
            return result
        if isinstance(result, BaseModel):
            result = result.model_dump(mode="json")
        return ToolResult(success=True, content=result)
