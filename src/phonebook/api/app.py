"""
Main FastAPI application for the phonebook backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.factory import get_auth_service
from ..config import settings
from ..database import create_schema, dispose_database, init_database
from ..database.connection import check_database_connection
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..notifications import ChangeNotifier

# Configure logging before creating logger
configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting phonebook API...")
    init_database()

    ok, error = await check_database_connection()
    if not ok:
        logger.error("Database is not reachable", error=error)
        raise RuntimeError(error)

    if settings.auto_create_schema:
        await create_schema()

    yield

    logger.info("Shutting down phonebook API...")
    await dispose_database()


def create_app(notifier: ChangeNotifier | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        notifier: Change notifier shared by all requests; a new one is created
            when omitted.
    """
    # Fail fast when no JWT secret is configured
    auth_service = get_auth_service()
    notifier = notifier or ChangeNotifier()

    app = FastAPI(
        title="Phonebook API",
        description="GraphQL API for persons, users, authors and books",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.notifier = notifier

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        ok, _ = await check_database_connection()
        return {
            "status": "healthy" if ok else "degraded",
            "database": "ok" if ok else "unavailable",
            "version": __version__,
        }

    from ..graphql.schema import create_graphql_router, validate_schema

    logger.info("Validating GraphQL schema...")
    validate_schema()

    graphql_router = create_graphql_router(auth_service, notifier, graphiql=settings.debug)
    app.include_router(graphql_router, prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app
