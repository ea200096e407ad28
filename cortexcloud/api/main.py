"""FastAPI application entrypoint, middleware, and error handlers."""

import time
from collections.abc import Awaitable, Callable

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from cortexcloud.api.routes.analyses import router as analyses_router
from cortexcloud.api.routes.assistant import router as assistant_router
from cortexcloud.api.routes.auth import router as auth_router
from cortexcloud.api.routes.datasets import router as datasets_router
from cortexcloud.core.config import settings
from cortexcloud.core.errors import AppError, UnexpectedError
from cortexcloud.core.logging import bind_context, clear_context, configure_logging, get_logger
from cortexcloud.db.store import InMemoryStore, Store

configure_logging(
    log_level=settings.log_level,
    log_format=settings.log_format,
    service_name=settings.service_name,
    environment=settings.environment,
)

logger = get_logger(__name__)


async def request_logging_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Log incoming requests and responses with timing metadata."""
    started_at = time.perf_counter()
    clear_context()
    bind_context(http_method=request.method, http_path=request.url.path)
    logger.info("http.request.started")

    try:
        response = await call_next(request)
    except Exception:
        duration_ms = round((time.perf_counter() - started_at) * 1000, 2)
        logger.exception("http.request.failed", duration_ms=duration_ms)
        clear_context()
        raise

    duration_ms = round((time.perf_counter() - started_at) * 1000, 2)
    logger.info(
        "http.request.completed",
        status_code=response.status_code,
        duration_ms=duration_ms,
    )
    clear_context()
    return response


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    """Translate domain-level exceptions into API responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": jsonable_encoder(exc.detail)},
    )


async def unhandled_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Return a safe error response for unhandled exceptions."""
    logger.exception("app.unhandled_exception", exc_info=exc)
    fallback = UnexpectedError()
    return JSONResponse(status_code=fallback.status_code, content={"detail": fallback.detail})


def create_app(store: Store | None = None) -> FastAPI:
    """Build the API with its routers and an injected storage backend."""
    application = FastAPI(title="CortexCloud")
    application.state.store = store if store is not None else InMemoryStore()

    application.include_router(auth_router)
    application.include_router(datasets_router)
    application.include_router(analyses_router)
    application.include_router(assistant_router)

    application.middleware("http")(request_logging_middleware)
    application.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )

    application.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    application.add_exception_handler(Exception, unhandled_exception_handler)

    @application.get("/")
    def read_root() -> dict[str, str]:
        """Return a lightweight healthcheck response."""
        return {"status": "ok", "service": settings.service_name}

    return application


app = create_app()
