"""FastAPI application with the book catalog GraphQL endpoint."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from strawberry.fastapi import GraphQLRouter

from api.auth import AuthConfig
from api.context import CatalogContext
from api.events import EventBus
from api.schema import schema
from common.env import env
from common.logger import get_logger, setup_logging, success
from store import DatabaseError, DocumentStore, get_store

logger = get_logger(__name__)

VERSION = "0.1.0"


def create_graphql_router(store: DocumentStore, bus: EventBus, auth: AuthConfig) -> GraphQLRouter:
    """
    Create the GraphQL router serving queries, mutations and subscriptions.

    Returns:
        GraphQLRouter whose context carries the store, bus and token settings
    """

    async def get_context() -> CatalogContext:
        return CatalogContext(store=store, bus=bus, auth=auth)

    return GraphQLRouter(schema, context_getter=get_context)


def create_app(
    store: DocumentStore | None = None,
    bus: EventBus | None = None,
    auth: AuthConfig | None = None,
) -> FastAPI:
    """
    Build the application.

    Missing arguments are configured from the environment. A store that
    cannot be reached at startup is logged and the server still starts.

    Raises:
        ValueError: If JWT_SECRET or the store settings are missing
    """
    store = store or get_store()
    bus = bus or EventBus()
    auth = auth or AuthConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Connecting to {type(store).__name__}")
        try:
            await store.connect()
            await store.ensure_indexes()
            logger.info("Connected to document store")
        except DatabaseError as e:
            logger.error(f"Error connecting to document store: {e}")
        yield
        await store.close()

    app = FastAPI(
        title="Book Catalog GraphQL API",
        description="GraphQL API for books, authors and users",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.bus = bus

    # Enable CORS for frontend development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_graphql_router(store, bus, auth), prefix="/graphql")

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Book Catalog GraphQL API",
            "version": VERSION,
            "graphql_endpoint": "/graphql",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run() -> None:
    """Start the server on SERVER_HOST:SERVER_PORT."""
    setup_logging()
    host, port = env.server_host(), env.server_port()
    success(f"Starting server at http://{host}:{port}/graphql")
    uvicorn.run("api.main:create_app", factory=True, host=host, port=port, log_config=None)


if __name__ == "__main__":
    run()
