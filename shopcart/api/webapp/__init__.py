from __future__ import annotations

from fastapi import APIRouter

from . import routes_cart
from .common import set_cart_service

router = APIRouter(prefix="/api/v1", tags=["cart"])

router.include_router(routes_cart.router)

__all__ = ["router", "set_cart_service"]
