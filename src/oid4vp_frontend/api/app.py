"""FastAPI application for the OID4VP frontend"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from oid4vp_frontend import __version__
from oid4vp_frontend.api.dependencies import DependencyContainer, get_container, set_container
from oid4vp_frontend.api.errors import register_error_handlers
from oid4vp_frontend.api.routes import transactions

logger = logging.getLogger(__name__)


def create_app(container: Optional[DependencyContainer] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: Dependency container; the global one is used if None

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting OID4VP frontend...")
        config = get_container().get_config()
        logger.info("Backend: %s, public URL: %s", config.api_base_url, config.public_url)

        yield

        logger.info("Shutting down OID4VP frontend...")
        await get_container().aclose()

    if container is not None:
        set_container(container)

    app = FastAPI(
        title="OID4VP Verifier Frontend",
        description="""
        Verifier-side frontend for OpenID for Verifiable Presentations

        Starts presentation transactions at a verifier backend, keeps the
        transaction secrets in a server-side session and verifies the
        wallet response (direct_post or JARM protected direct_post.jwt).

        ## Endpoints
        - `POST /init` - Initiate presentation transaction
        - `GET /result` - Retrieve and verify the wallet response
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_error_handlers(app)
    app.include_router(transactions.router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return JSONResponse(content={"status": "healthy", "service": "oid4vp-frontend"})

    return app


def main() -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(create_app(), host="0.0.0.0", port=8000, log_level="info")


if __name__ == "__main__":
    main()
