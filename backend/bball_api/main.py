# Main FastAPI application
from fastapi import FastAPI, Request
from fastapi.responses import Response
from bball_api.api import competition, games, health, players, sync
from bball_api.core.config import settings
from bball_api.core.constants import API_VERSION
from bball_api.core.errors import ApiError
from bball_api.services.cache import TTLCache
from bball_api.services.response import CORS_HEADERS, error_response
import logging

# for logging in fastapi
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(levelname)s: %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Basketball Data API", version=API_VERSION)

    # lives as long as the process; lost on restart
    app.state.cache = TTLCache()

    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(games.router, prefix="/api", tags=["Games"])
    app.include_router(competition.router, prefix="/api", tags=["Competition"])
    app.include_router(players.router, prefix="/api", tags=["Players"])
    app.include_router(sync.router, prefix="/api", tags=["Sync"])

    # every response is readable cross-origin; preflight gets an empty 204
    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed: {exc.message}")
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return error_response(f"Internal error: {exc}", 500)

    return app


app = create_app()
