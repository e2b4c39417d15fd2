"""
Middleware for request context and logging
"""

import json
import re
import time
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

SENSITIVE_KEYS = {
    "password",
    "token",
    "secret",
    "auth",
    "authorization",
    "access_token",
    "jwt",
    "session",
    "cookie",
    "credentials",
}

_OPERATION_RE = re.compile(r"\b(query|mutation|subscription)\s+(\w+)")


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Remove sensitive query parameters from logging."""
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = value

    return sanitized


def operation_name_from_payload(data: dict[str, Any]) -> str | None:
    """Derive a loggable operation name from a GraphQL request payload."""
    op = data.get("operationName")
    if isinstance(op, str) and op:
        return op

    q = data.get("query", "")
    if not isinstance(q, str) or not q:
        return None
    if "__schema" in q or "IntrospectionQuery" in q:
        return "__introspection"

    match = _OPERATION_RE.search(q)
    if match:
        kind, name = match.groups()
        return name if kind == "query" else f"{kind}:{name}"

    stripped = q.lstrip()
    if stripped.startswith("mutation"):
        return "mutation:unnamed_operation"
    return "unnamed_operation"


async def extract_graphql_operation_name(request: Request) -> str | None:
    if request.url.path != "/graphql":
        return None

    if request.method == "GET":
        return operation_name_from_payload(dict(request.query_params))

    if request.method == "POST":
        try:
            body = await request.body()
            if not body:
                return None
            data = json.loads(body)
        except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
            return None
        if not isinstance(data, dict):
            return None
        return operation_name_from_payload(data)

    return None


def loggable_query_params(request: Request) -> dict[str, Any] | None:
    """Query parameters safe to log; GraphQL documents sent via GET are hidden."""
    if not request.query_params:
        return None
    params = sanitize_query_params(dict(request.query_params))
    if request.url.path == "/graphql":
        for key in ("query", "variables", "extensions"):
            if key in params:
                params[key] = "[REDACTED]"
    return params


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log its start and outcome.

    The id comes from an incoming ``X-Request-ID`` header when present and is
    echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(request_id=request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()
        graphql_operation = await extract_graphql_operation_name(request)

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            query_params=loggable_query_params(request),
            graphql_operation=graphql_operation,
            remote_addr=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                graphql_operation=graphql_operation,
                error=str(e),
            )
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=request.url.path,
                graphql_operation=graphql_operation,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            clear_request_context()
