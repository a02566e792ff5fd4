# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the playlists API.
# It configures the FastAPI application with middleware, routers, and handlers,
# and owns the lifecycle of the shared Redis, HTTP and tracing clients.
#
# Usage:
#   uvicorn app.main:app --port 10010
#   playlists-api
# =============================================================================

import logging
from contextlib import asynccontextmanager

import httpx
import redis.asyncio as aioredis
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from app.config import Settings, settings as default_settings
from app.exceptions import PlaylistsApiException, playlists_api_exception_handler
from app.routers import playlists
from core.services.aggregator import PlaylistAggregator
from lib.playlist_store import PlaylistStore
from lib.tracing import TracingPropagator, configure_tracing
from lib.videos_client import VideosClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.is_debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# CORS policy applied to every response in DEBUG mode
CORS_ALLOW_METHODS = ["POST", "GET", "OPTIONS", "PUT", "DELETE"]
CORS_ALLOW_HEADERS = [
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "X-CSRF-Token",
    "Authorization",
    "accept",
    "origin",
    "Cache-Control",
    "X-Requested-With",
    "X-MY-API-Version",
    "X-B3-TraceId",
    "X-B3-SpanId",
    "X-B3-ParentSpanId",
    "X-B3-Sampled",
    "X-B3-Flags",
]

CORS_HEADERS = {
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
}


def _lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: create the tracer provider, the Redis and HTTP clients, and
          wire the store, videos client and aggregator onto app.state
        - Shutdown: close the clients and flush pending spans
        """
        logger.info(f"Starting {settings.SERVICE_NAME} in {settings.ENVIRONMENT} mode")

        provider = configure_tracing(settings)
        tracing = TracingPropagator(provider.get_tracer(settings.SERVICE_NAME))

        redis_client = aioredis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            socket_timeout=settings.REDIS_TIMEOUT_SECONDS,
            socket_connect_timeout=settings.REDIS_TIMEOUT_SECONDS,
        )
        http_client = httpx.AsyncClient(timeout=settings.VIDEOS_API_TIMEOUT_SECONDS)

        videos_client = VideosClient(http_client, settings.videos_api_base_url, tracing)
        app.state.tracing = tracing
        app.state.playlist_store = PlaylistStore(redis_client, tracing, key=settings.PLAYLISTS_KEY)
        app.state.aggregator = PlaylistAggregator(videos_client, tracing)

        logger.info(f"Playlist store: redis {settings.redis_address} key '{settings.PLAYLISTS_KEY}'")
        logger.info(f"videos-api: {settings.videos_api_base_url}")

        yield

        logger.info(f"Shutting down {settings.SERVICE_NAME}")
        await http_client.aclose()
        await redis_client.aclose()
        provider.shutdown()

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-loaded settings

    Returns:
        FastAPI: The configured application
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Playlists API",
        description="Playlists with their videos resolved from videos-api.",
        version="1.0.0",
        lifespan=_lifespan(settings),
    )

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    # Permissive CORS only in DEBUG mode; no CORS headers otherwise
    if settings.is_debug:
        @app.middleware("http")
        async def add_cors_headers(request: Request, call_next):
            """Stamp the CORS headers on every response and answer preflights."""
            if request.method == "OPTIONS" and "access-control-request-method" in request.headers:
                response = Response(status_code=200)
            else:
                response = await call_next(request)
            response.headers.update(CORS_HEADERS)
            return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(PlaylistsApiException)
    async def handle_playlists_api_exception(request: Request, exc: PlaylistsApiException):
        """Handle custom playlists API exceptions."""
        logger.error(f"{exc.code}: {exc.message}")
        return await playlists_api_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(playlists.router, tags=["Playlists"])

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on API_HOST:API_PORT."""
    uvicorn.run(app, host=default_settings.API_HOST, port=default_settings.API_PORT)


if __name__ == "__main__":
    run()
