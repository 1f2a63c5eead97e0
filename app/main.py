"""
FastAPI application factory
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import get_settings
from app.domain.errors import SubscriptionError
from app.infrastructure.db.session import check_db_connection
from app.api.v1 import subscriptions

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Логирует каждый запрос (метод, путь, статус, длительность) и ловит необработанные ошибки"""

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        logger.info("Started %s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("ERROR on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"error": "internal server error"})

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "Completed %s %s -> %d in %.1fms",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.RUN_MIGRATIONS:
        from app.infrastructure.db.migrations import run_migrations
        run_migrations()
    logger.info("Application started")
    yield
    logger.info("Application stopped")


def create_app() -> FastAPI:
    """
    Application factory - создаёт и настраивает FastAPI приложение

    Returns:
        Настроенный FastAPI app
    """
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title="Subscription Service",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Все ошибки отдаются как {"error": "<message>"}
    @app.exception_handler(SubscriptionError)
    async def subscription_error_handler(request: Request, exc: SubscriptionError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_error(exc)
        logger.warning("%s %s invalid request: %s", request.method, request.url.path, message)
        return _error_response(400, message)

    # Routers
    app.include_router(subscriptions.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (проверяет доступность БД)"""
        check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=get_settings().APP_PORT,
    )
