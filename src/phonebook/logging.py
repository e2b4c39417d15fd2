"""
Logging setup for the phonebook API, built on structlog.

Per-request values (request id, authenticated user id) are kept in context
variables and merged into every event logged while the request is handled,
including events from resolvers and the store.
"""

import logging
import secrets
import sys
from contextvars import ContextVar
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "aiosqlite", "asyncio")


def add_request_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor attaching the current request and user ids."""
    request_id = request_id_ctx.get()
    if request_id:
        event_dict.setdefault("request_id", request_id)

    user_id = user_id_ctx.get()
    if user_id:
        event_dict.setdefault("user_id", user_id)

    return event_dict


def _resolve_level(debug: bool, level: str | None) -> int:
    if debug:
        return logging.DEBUG
    return logging.getLevelNamesMapping().get((level or "INFO").upper(), logging.INFO)


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        debug: Human-readable console output at DEBUG level when true,
            JSON lines otherwise.
        level: Level name used when not in debug mode (e.g. ``"WARNING"``);
            defaults to INFO.
    """
    log_level = _resolve_level(debug, level)

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_request_context,
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Short random id for requests that arrive without ``X-Request-ID``."""
    return secrets.token_hex(8)


def set_request_context(request_id: str | None = None) -> str:
    """Start the logging context of a request and return its id."""
    request_id = request_id or generate_request_id()
    request_id_ctx.set(request_id)
    user_id_ctx.set(None)
    return request_id


def bind_user_id(user_id: str | None) -> None:
    """Attach the authenticated user to subsequent log events of this request."""
    user_id_ctx.set(user_id)


def clear_request_context() -> None:
    request_id_ctx.set(None)
    user_id_ctx.set(None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def get_user_id() -> str | None:
    return user_id_ctx.get()
