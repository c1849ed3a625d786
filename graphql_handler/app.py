import os
from typing import Optional
from fastapi import FastAPI
from dotenv import load_dotenv
from graphql import GraphQLSchema

from .handler import CreateContext, OnError, create_handler
from .routes.graphql import router as graphql_router
from .routes.health import router as health_router


def create_app(
    schema: GraphQLSchema,
    create_context: Optional[CreateContext] = None,
    on_error: Optional[OnError] = None,
) -> FastAPI:
    """Serve the Lambda handler over plain HTTP for local development."""
    # Load environment variables from .env if present
    if os.getenv("DOTENV_DISABLED", "false").lower() not in {"1", "true", "yes"}:
        load_dotenv()

    app = FastAPI(title="GraphQL Lambda Handler", version="0.1.0")

    # CORS headers come from the handler itself, so no CORSMiddleware here
    app.state.graphql_handler = create_handler(
        schema,
        create_context=create_context,
        on_error=on_error,
    )

    # Routers
    app.include_router(health_router, prefix="/api")
    app.include_router(graphql_router, prefix="/api")

    return app
