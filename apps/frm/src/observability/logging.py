"""Logging configuration and per-module context helpers."""
from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from loguru import logger

from apps.frm.src.config import Settings, get_settings

_resource_var: ContextVar[str | None] = ContextVar("resource", default=None)

PLAIN_FORMAT = "{message}"


def get_current_resource() -> str | None:
    """Return the module name currently being synchronised, if any."""

    return _resource_var.get()


@contextmanager
def resource_context(module_name: str) -> Iterator[None]:
    """Temporarily bind the module name to every emitted log record."""

    token = _resource_var.set(module_name)
    try:
        yield
    finally:
        _resource_var.reset(token)


def _patch(record: Any) -> None:
    record.setdefault("extra", {})
    record["extra"]["resource"] = _resource_var.get()


def configure_logging(
    *,
    sink: Any | None = None,
    verbose: bool = False,
    settings: Settings | None = None,
) -> None:
    """Configure loguru for command line use.

    Records are written as bare messages to stderr unless ``LOG_JSON`` asks
    for serialized output. ``verbose`` lowers the level to ``DEBUG``.
    """

    settings = settings or get_settings()
    handler_sink = sink if sink is not None else sys.stderr
    level = "DEBUG" if verbose else settings.log_level.upper()

    logger.remove()
    logger.configure(
        handlers=[
            {
                "sink": handler_sink,
                "level": level,
                "format": PLAIN_FORMAT,
                "serialize": settings.log_json,
                "backtrace": False,
                "diagnose": False,
            }
        ],
        extra={"resource": None},
        patcher=_patch,
    )
