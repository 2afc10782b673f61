"""CLI entrypoints for serpwright."""

from __future__ import annotations

import json

import typer
from openai import OpenAIError

from serpwright.agents import Agent, AgentConfig, AgentError
from serpwright.config import ConfigurationError, Settings, load_settings
from serpwright.credentials import (
    PROVIDER_API_KEY,
    Credentials,
    default_sources,
    load_credentials,
    resolve_secret,
)
from serpwright.gateway import HttpGateway
from serpwright.llm.client import LLMClient
from serpwright.logging import configure_logging, get_logger
from serpwright.tools import ToolCall, ToolRegistry, WebSearchTools

app = typer.Typer(add_completion=False, help="Answer questions with an LLM that can search and scrape the web")
logger = get_logger(__name__)

DEFAULT_QUERY = "What is the meaning of life?"


def _startup() -> tuple[Settings, Credentials]:
    settings = load_settings()
    configure_logging(settings.log_level)
    try:
        credentials = load_credentials(default_sources(settings))
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e
    return settings, credentials


def _build_registry(gateway: HttpGateway, settings: Settings) -> ToolRegistry:
    return ToolRegistry.build(WebSearchTools.from_settings(gateway, settings))


def _print_tool_call(tool_call: ToolCall) -> None:
    typer.echo(
        f"Tool called: tool {tool_call.name}, args {json.dumps(tool_call.arguments, ensure_ascii=False)}",
        err=True,
    )


@app.command()
def ask(
    query: str = typer.Argument(DEFAULT_QUERY, help="Question to answer."),
    model: str | None = typer.Option(None, "--model", help="LLM model (overrides SERPWRIGHT_LLM_MODEL)"),
    max_iterations: int | None = typer.Option(
        None,
        "--max-iterations",
        min=1,
        help="Maximum LLM turns (overrides SERPWRIGHT_AGENT_MAX_ITERATIONS)",
    ),
) -> None:
    """Answer QUERY and print the answer to stdout."""

    settings, credentials = _startup()
    if not query.strip():
        raise typer.BadParameter("QUERY must not be empty.")

    config = AgentConfig(
        system_prompt=settings.system_prompt,
        model=model or settings.llm_model,
        max_iterations=max_iterations or settings.agent_max_iterations,
    )
    llm = LLMClient(
        credentials.llm_api_key,
        model=config.model,
        base_url=settings.llm_base_url,
        timeout_s=settings.llm_timeout_s,
    )

    with HttpGateway(
        credentials.provider_api_key,
        endpoint=settings.provider_endpoint,
        timeout_s=settings.http_timeout_s,
    ) as gateway:
        agent = Agent(llm, _build_registry(gateway, settings), config, on_tool_call=_print_tool_call)
        logger.info("CLI run requested")
        try:
            answer = agent.run(query)
        except (AgentError, OpenAIError) as e:
            logger.error("Agent run failed: %s", e)
            raise typer.Exit(code=1) from e

    typer.echo(answer)


@app.command("tools")
def list_tools() -> None:
    """List the tools offered to the model."""

    settings = load_settings()
    configure_logging(settings.log_level)
    try:
        provider_api_key = resolve_secret(PROVIDER_API_KEY, default_sources(settings))
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e

    with HttpGateway(
        provider_api_key,
        endpoint=settings.provider_endpoint,
        timeout_s=settings.http_timeout_s,
    ) as gateway:
        registry = _build_registry(gateway, settings)
        for descriptor in registry.list_tools():
            typer.echo(f"{descriptor.name}: {descriptor.description}")
            for param in descriptor.parameters:
                typer.echo(f"  {param.name} ({param.type}): {param.description}")


if __name__ == "__main__":
    app()
