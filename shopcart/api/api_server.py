"""
FastAPI server for the cart widget.

The page's UI layer calls these endpoints for every cart event and reads
the rendered invoice and badge text back.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shopcart import __version__
from shopcart.api.webapp import router as cart_router
from shopcart.api.webapp import set_cart_service
from shopcart.core.cart_storage import build_cart_store
from shopcart.core.config import Settings, load_settings
from shopcart.core.exceptions import ShopCartException, ValidationException
from shopcart.core.sentry_integration import capture_exception, init_sentry
from shopcart.domain.pricing import PricingEngine
from shopcart.logging_config import logger, setup_logging
from shopcart.services.cart_service import CartService

DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:5500",
    "http://127.0.0.1:8080",
]


def build_cart_service(settings: Settings) -> CartService:
    return CartService(
        build_cart_store(settings),
        PricingEngine(settings.pricing),
        currency_symbol=settings.currency_symbol,
    )


def create_app(settings: Settings | None = None, service: CartService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Typed settings; loaded from the environment when omitted
        service: Cart service to serve; built from ``settings`` when omitted
    """
    settings = settings or load_settings()
    cart_service = service or build_cart_service(settings)
    set_cart_service(cart_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Cart API starting (%s)", settings.environment)
        yield
        logger.info("Cart API shutting down")

    app = FastAPI(
        title="Shop Cart API",
        description="Cart pricing and reconciliation for the shop widget",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )
    app.state.cart_service = cart_service

    allowed_origins = list(settings.cors_allowed_origins)
    if settings.is_dev:
        allowed_origins.extend(origin for origin in DEV_ORIGINS if origin not in allowed_origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(ValidationException)
    async def _validation_error(request: Request, exc: ValidationException) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.exception_handler(ShopCartException)
    async def _cart_error(request: Request, exc: ShopCartException) -> JSONResponse:
        logger.error("Cart error on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        capture_exception(exc, request={"path": request.url.path, "method": request.method})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    app.include_router(cart_router)
    return app


def run(host: str = "0.0.0.0", port: int = 8000) -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    init_sentry(settings.sentry_dsn, environment=settings.environment)
    uvicorn.run(create_app(settings), host=host, port=port)
