"""Tests for the tool registry."""

from __future__ import annotations

import pytest

from serpwright.tools import (
    DuplicateToolError,
    FunctionTool,
    RegistryFrozenError,
    ToolDescriptor,
    ToolNotFoundError,
    ToolParameter,
    ToolRegistry,
    ToolResult,
)


def _tool(name: str, func=None) -> FunctionTool:
    descriptor = ToolDescriptor(
        name=name,
        description=f"The {name} tool",
        parameters=(ToolParameter(name="text", type="string", description="Input text"),),
    )
    return FunctionTool(descriptor, func or (lambda text: text.upper()))


class _PairToolSet:
    def tools(self) -> list[FunctionTool]:
        return [_tool("first"), _tool("second")]


def test_two_distinct_tools_are_listed_in_order() -> None:
    registry = ToolRegistry.build(_tool("alpha"), _tool("beta"))

    assert [d.name for d in registry.list_tools()] == ["alpha", "beta"]
    assert len(registry) == 2
    assert "alpha" in registry


def test_toolset_registers_all_its_tools() -> None:
    registry = ToolRegistry.build(_PairToolSet())

    assert [d.name for d in registry.list_tools()] == ["first", "second"]
    assert registry.lookup("second").description == "The second tool"


def test_lookup_of_unknown_name_fails() -> None:
    registry = ToolRegistry.build(_tool("alpha"))

    with pytest.raises(ToolNotFoundError) as excinfo:
        registry.lookup("missing")

    assert isinstance(excinfo.value, KeyError)
    assert "missing" in str(excinfo.value)
    assert "alpha" in str(excinfo.value)


def test_duplicate_names_are_rejected() -> None:
    registry = ToolRegistry()
    registry.register(_tool("alpha"))

    with pytest.raises(DuplicateToolError):
        registry.register(_tool("alpha"))


def test_duplicate_names_within_one_toolset_are_rejected() -> None:
    class _Clash:
        def tools(self) -> list[FunctionTool]:
            return [_tool("same"), _tool("same")]

    registry = ToolRegistry()
    with pytest.raises(DuplicateToolError):
        registry.register(_Clash())
    assert len(registry) == 0


def test_frozen_registry_rejects_registration() -> None:
    registry = ToolRegistry.build(_tool("alpha"))

    assert registry.frozen
    with pytest.raises(RegistryFrozenError):
        registry.register(_tool("beta"))
    assert [d.name for d in registry.list_tools()] == ["alpha"]


def test_descriptor_json_schema() -> None:
    schema = _tool("alpha").descriptor.json_schema()

    assert schema == {
        "type": "object",
        "properties": {"text": {"type": "string", "description": "Input text"}},
        "required": ["text"],
    }


def test_execute_returns_content_on_success() -> None:
    registry = ToolRegistry.build(_tool("alpha"))

    result = registry.execute("alpha", {"text": "hi"})

    assert result == ToolResult(success=True, content="HI")


def test_execute_unknown_tool_is_a_failed_result() -> None:
    registry = ToolRegistry.build(_tool("alpha"))

    result = registry.execute("nope", {})

    assert result.success is False
    assert "nope" in (result.error or "")
    assert result.metadata["error_type"] == "ToolNotFoundError"


def test_execute_with_bad_arguments_is_a_failed_result() -> None:
    registry = ToolRegistry.build(_tool("alpha"))

    result = registry.execute("alpha", {"txt": "typo"})

    assert result.success is False
    assert result.metadata["error_type"] == "TypeError"
    assert "txt" in (result.error or "")


def test_execute_reports_tool_errors() -> None:
    def broken(text: str) -> str:
        raise RuntimeError(f"cannot handle {text}")

    registry = ToolRegistry.build(_tool("alpha", broken))

    result = registry.execute("alpha", {"text": "this"})

    assert result.success is False
    assert result.error == "cannot handle this"
    assert result.metadata == {"error_type": "RuntimeError"}


def test_tool_invoke_propagates_errors() -> None:
    def broken(text: str) -> str:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        _tool("alpha", broken).invoke(text="x")
