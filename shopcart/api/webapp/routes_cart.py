from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from shopcart.domain.models import ItemSelection
from shopcart.domain.pricing import DiscountKind
from shopcart.services.cart_service import CartService

from .common import (
    BadgesResponse,
    CartResponse,
    CartStateResponse,
    MembershipRequest,
    cart_response,
    get_cart_service,
    logger,
)

router = APIRouter()


def _render(service: CartService, discount: Optional[DiscountKind]) -> CartResponse:
    if discount is None:
        view = service.render(wait_for_decision=True)
    else:
        view = service.render(lambda _decision: discount)
    return cart_response(view, service.currency_symbol)


@router.get("/cart", response_model=CartResponse)
async def get_cart(
    discount: Optional[DiscountKind] = Query(
        None, description="Answer to the discount prompt: member, volume or none"
    ),
    service: CartService = Depends(get_cart_service),
):
    """Render the cart and its invoice.

    When both discounts qualify and no ``discount`` answer is given, the
    response carries ``decision`` instead of ``invoice``.
    """
    return _render(service, discount)


@router.post("/cart/items", response_model=CartStateResponse)
async def add_cart_item(
    selection: ItemSelection,
    service: CartService = Depends(get_cart_service),
):
    cart = service.add_item(selection)
    return CartStateResponse.build(cart, service.is_member, badge=service.badge(selection.id))


@router.delete("/cart/items/{item_id}", response_model=CartStateResponse)
async def remove_cart_item(
    item_id: str,
    service: CartService = Depends(get_cart_service),
):
    cart = service.remove_item(item_id)
    return CartStateResponse.build(cart, service.is_member, badge=service.badge(item_id))


@router.post("/cart/clear", response_model=CartStateResponse)
async def clear_cart(service: CartService = Depends(get_cart_service)):
    cart = service.clear()
    return CartStateResponse.build(cart, service.is_member)


@router.put("/cart/membership", response_model=CartResponse)
async def set_membership(
    body: MembershipRequest,
    service: CartService = Depends(get_cart_service),
):
    service.set_membership(body.member)
    logger.info("Membership set to %s", body.member)
    return _render(service, None)


@router.get("/cart/badges", response_model=BadgesResponse)
async def get_badges(
    ids: str = Query(..., description="Comma-separated catalog ids"),
    service: CartService = Depends(get_cart_service),
):
    item_ids = [item_id.strip() for item_id in ids.split(",") if item_id.strip()]
    return BadgesResponse(badges=service.badges(item_ids))
