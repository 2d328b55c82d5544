"""Orders service FastAPI application.

Usage:
    uvicorn orders.app:create_app --factory --host 0.0.0.0 --port 8000
    orders-service                      # same, reading PORT from the environment
"""

import time
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orders.api import order_router
from orders.api.errors import register_error_handlers
from orders.config import Settings
from orders.auth import TokenVerifier
from orders.domain import init_domain
from orders.order.order import isoformat, utcnow
from orders.utils.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SERVICE_NAME = "Orders Service"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.env, settings.log_level)
    domain = init_domain()

    app = FastAPI(
        title="Orders API",
        description="Order lifecycle, ownership checks and listing",
    )
    app.state.settings = settings
    app.state.tokens = TokenVerifier(settings.jwt_secret, settings.jwt_algorithm)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Tag every request with a correlation id, push the domain context and log the outcome."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        clear_context()
        add_context(request_id=request_id)
        started = time.perf_counter()
        try:
            with domain.domain_context():
                response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response
        finally:
            clear_context()

    register_error_handlers(app)
    app.include_router(order_router)

    # -----------------------------------------------------------------------
    # Health / status
    # -----------------------------------------------------------------------
    @app.get("/status")
    async def status():
        return JSONResponse(content={"success": True, "data": {"status": "Orders service is running"}})

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "success": True,
                "data": {"status": "OK", "service": SERVICE_NAME, "timestamp": isoformat(utcnow())},
            }
        )

    logger.debug("Orders application created", env=settings.env)
    return app


def main():
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
