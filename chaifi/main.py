"""
FastAPI Application Entry Point
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from chaifi import __version__
from chaifi.api.v1.router import api_router
from chaifi.config import API_VERSION, DEBUG, LANG
from chaifi.core.exceptions import ChaifiError
from chaifi.core.i18n_logger import get_i18n_logger
from chaifi.core.security import limiter
from chaifi.database.session import Store

logger = get_i18n_logger(__name__)


async def chaifi_error_handler(request: Request, exc: ChaifiError) -> JSONResponse:
    """Render domain errors as {"error": <message>, "details": ...}"""
    logger.warning(
        "app.domain_error",
        language=LANG,
        method=request.method,
        path=request.url.path,
        status=exc.status_code,
        message=exc.message
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details},
    )


def create_app(store: Optional[Store] = None) -> FastAPI:
    """
    Build the application around a Store.

    The store is connected when the app starts and disconnected when it stops;
    by default it points at DATABASE_URL.
    """
    store = store or Store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app.startup", language=LANG, version=__version__)
        await store.connect()
        app.state.store = store
        yield
        await store.disconnect()
        logger.info("app.shutdown", language=LANG)

    app = FastAPI(
        title="Chai-fi Counter API",
        description="Point of sale, stock and sales summaries for the Chai-fi counter",
        version=__version__,
        debug=DEBUG,
        lifespan=lifespan
    )

    # CORS middleware (configure as needed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify actual origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(ChaifiError, chaifi_error_handler)

    # Include API v1 router
    app.include_router(api_router, prefix=f"/api/{API_VERSION}")

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root():
        """Root endpoint"""
        return {
            "message": "API is running",
            "version": __version__,
            "docs": "/docs"
        }

    @app.get("/health")
    @app.get(f"/api/{API_VERSION}/health")
    async def health_check(request: Request):
        """Liveness plus a database round trip"""
        database_ok = await request.app.state.store.ping()
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "healthy" if database_ok else "degraded", "database": database_ok},
        )

    return app


app = create_app()
