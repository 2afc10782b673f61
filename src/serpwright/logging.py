"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


_run_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("serpwright_run_id", default="-")
_iteration_var: contextvars.ContextVar[str] = contextvars.ContextVar("serpwright_iteration", default="-")


class _ContextFilter(logging.Filter):
    """Inject run context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.run_id = _run_id_var.get()  # type: ignore[attr-defined]
        record.iteration = _iteration_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def run_context(*, run_id: str) -> Any:
    """Temporarily bind an agent run to log records.

    Args:
        run_id: Run identifier.
    """

    token_run = _run_id_var.set(run_id)
    token_iteration = _iteration_var.set("-")
    try:
        yield
    finally:
        _run_id_var.reset(token_run)
        _iteration_var.reset(token_iteration)


def set_iteration(iteration: int) -> None:
    """Update current agent iteration in context."""

    _iteration_var.set(str(iteration))


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Logs go to stderr so stdout only carries the answer.

    Args:
        level: Logging level name.
    """

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
    )
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="run=%(run_id)s iter=%(iteration)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level.upper())
    # Avoid duplicate handlers if configure_logging is called multiple times
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                h.addFilter(_ContextFilter())
                h.setFormatter(formatter)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)
