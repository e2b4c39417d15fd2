"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from starlette.requests import HTTPConnection
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from ..auth.context import AuthContext
from ..auth.middleware import get_auth_context
from ..auth.service import AuthService
from ..logging import get_logger
from ..notifications import ChangeNotifier
from .loaders import Loaders
from .mutations.root import Mutation
from .queries.root import Query
from .subscriptions.root import Subscription

logger = get_logger(__name__)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


async def build_context(
    authorization: str | None, auth_service: AuthService, notifier: ChangeNotifier
) -> dict[str, Any]:
    """Assemble the context for a request or websocket connection.

    The caller and the DataLoaders are filled in per operation by
    ``OperationContext``, since a websocket connection reuses one context
    for every operation it carries.
    """
    return {
        "authorization": authorization,
        "auth": AuthContext.anonymous(),
        "current_user": None,
        "auth_service": auth_service,
        "notifier": notifier,
        "loaders": Loaders(),
    }


async def refresh_context(context: dict[str, Any]) -> None:
    """Re-resolve the caller and start fresh DataLoaders on an existing context."""
    auth = await get_auth_context(context.get("authorization"), context["auth_service"])
    context["auth"] = auth
    context["current_user"] = auth.current_user
    context["loaders"] = Loaders()


class OperationContext(SchemaExtension):
    """Refresh the per-operation parts of the context before each operation runs."""

    async def on_operation(self):
        context = self.execution_context.context
        if isinstance(context, dict) and "auth_service" in context:
            await refresh_context(context)
        yield


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    extensions=[OperationContext],
)


def create_graphql_router(
    auth_service: AuthService, notifier: ChangeNotifier, graphiql: bool = True
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI, serving queries and subscriptions."""

    async def get_context(connection: HTTPConnection) -> dict[str, Any]:
        """Get the context for GraphQL resolvers (HTTP requests and websockets)."""
        return await build_context(
            connection.headers.get("authorization"), auth_service, notifier
        )

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if graphiql else None,
        context_getter=get_context,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
    )
