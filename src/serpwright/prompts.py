from __future__ import annotations

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant that helps users to find information on the internet."
)

TOOL_PROTOCOL_PROMPT = (
    "You can use the tools listed below. To call a tool, reply with one or more blocks of the form\n"
    '<tool_call>{"name": "<tool name>", "arguments": {<arguments as JSON>}}</tool_call>\n'
    "and nothing else. Each result comes back to you inside a <tool_response> block.\n"
    "When you have enough information, reply with the final answer wrapped in "
    "<answer>...</answer> and do not call any more tools."
)
