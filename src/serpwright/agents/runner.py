"""Single-run tool-calling agent.

The agent alternates between asking the LLM for its next move and running the tools it asks
for, until the LLM gives an answer or the iteration budget runs out. There is no planning
here; the model decides everything.
"""

from __future__ import annotations

import json
import re
import uuid
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from serpwright.llm.client import ChatMessage
from serpwright.logging import get_logger, run_context, set_iteration
from serpwright.prompts import TOOL_PROTOCOL_PROMPT
from serpwright.tools.executor import ToolCall, ToolExecutor
from serpwright.tools.registry import ToolRegistry

logger = get_logger(__name__)

_ANSWER_RE = re.compile(r"<answer>(?P<body>.*?)</answer>", re.DOTALL | re.IGNORECASE)


class ChatModel(Protocol):
    def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str | None = None,
        temperature: float = 0.2,
    ) -> str:
        ...


class AgentError(RuntimeError):
    pass


class AgentIterationLimitError(AgentError):
    pass


@dataclass(frozen=True)
class AgentConfig:
    """Configuration for one agent."""

    system_prompt: str
    model: str
    max_iterations: int = 5

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")


def render_tool_catalog(registry: ToolRegistry) -> str:
    lines = ["Available tools:"]
    for descriptor in registry.list_tools():
        lines.append(f"- {descriptor.name}: {descriptor.description}")
        lines.append(f"  arguments schema: {json.dumps(descriptor.json_schema(), ensure_ascii=False)}")
    return "\n".join(lines)


def extract_answer(text: str) -> str:
    """Content of the `<answer>` block, or the whole reply when there is none."""

    m = _ANSWER_RE.search(text)
    if m:
        return m.group("body").strip()
    return text.strip()


class Agent:
    """Drives one query through the LLM and the registered tools."""

    def __init__(
        self,
        llm: ChatModel,
        registry: ToolRegistry,
        config: AgentConfig,
        *,
        on_tool_call: Callable[[ToolCall], None] | None = None,
    ) -> None:
        """Initialize agent.

        Args:
            llm: Chat model used for every turn.
            registry: Frozen tool registry.
            config: Prompt, model and iteration budget.
            on_tool_call: Optional hook fired before each tool runs.
        """
        self.config = config
        self._llm = llm
        self._registry = registry
        self._executor = ToolExecutor(registry)
        self._on_tool_call = on_tool_call

    def system_message(self) -> str:
        return "\n\n".join(
            [self.config.system_prompt, TOOL_PROTOCOL_PROMPT, render_tool_catalog(self._registry)]
        )

    def run(self, query: str) -> str:
        """Answer `query`.

        Tool calls requested on the final allowed turn are not executed.

        Raises:
            AgentIterationLimitError: If no answer came within `max_iterations` turns.
        """
        run_id = uuid.uuid4().hex[:12]
        with run_context(run_id=run_id):
            logger.info("Agent run started", extra={"model": self.config.model, "query_len": len(query)})
            return self._run(query)

    def _run(self, query: str) -> str:
        messages = [
            ChatMessage(role="system", content=self.system_message()),
            ChatMessage(role="user", content=query),
        ]

        for iteration in range(1, self.config.max_iterations + 1):
            set_iteration(iteration)
            response = self._llm.complete(messages, model=self.config.model)
            messages.append(ChatMessage(role="assistant", content=response))

            tool_calls = self._executor.parse_tool_calls(response)
            if not tool_calls:
                answer = extract_answer(response)
                logger.info("Agent run finished", extra={"iterations": iteration, "answer_len": len(answer)})
                return answer

            if iteration == self.config.max_iterations:
                # No turn left to read the results.
                logger.warning("Tool calls on last turn not executed", extra={"pending": len(tool_calls)})
                break

            for tool_call in tool_calls:
                if self._on_tool_call is not None:
                    self._on_tool_call(tool_call)
                logger.info("Tool call", extra={"tool": tool_call.name, "arguments": tool_call.arguments})
                outcome = self._executor.execute_tool_call(tool_call)
                messages.append(ChatMessage(role="user", content=outcome.formatted_response))

        raise AgentIterationLimitError(
            f"Agent reached maximum iterations ({self.config.max_iterations}) without an answer"
        )
