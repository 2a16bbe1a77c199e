"""FastAPI routes for the Ordering domain — cart and orders."""

import json

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from ordering.access import Principal
from ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    ChangeOrderStatusRequest,
    OrderResponse,
    PlaceOrderRequest,
    UpdateCartLineRequest,
)
from ordering.api.security import admin_principal, current_principal
from ordering.cart.cart import ShoppingCart
from ordering.cart.lines import AddCartLine, ClearCart, RemoveCartLine, SetCartLineQuantity
from ordering.cart.view import build_cart_view
from ordering.catalogue.product import Product
from ordering.checkout.placement import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import ChangeOrderStatus
from ordering.utils.locks import customer_lock


def _cart_response(customer_id) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).find_for(customer_id)
    return CartResponse.from_view(build_cart_view(cart))


def _order_response(order) -> OrderResponse:
    products = current_domain.repository_for(Product).find_many(line.product_id for line in order.lines)
    return OrderResponse.from_order(order, products)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    with customer_lock(principal.customer_id):
        cart = current_domain.repository_for(ShoppingCart).get_or_create(principal.customer_id)
        return CartResponse.from_view(build_cart_view(cart))


@cart_router.post("", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, principal: Principal = Depends(current_principal)) -> CartResponse:
    with customer_lock(principal.customer_id):
        command = AddCartLine(
            customer_id=principal.customer_id,
            product_id=body.product_id,
            quantity=body.quantity,
        )
        current_domain.process(command, asynchronous=False)
        return _cart_response(principal.customer_id)


@cart_router.put("/{product_id}", response_model=CartResponse)
async def update_cart_line(
    product_id: str,
    body: UpdateCartLineRequest,
    principal: Principal = Depends(current_principal),
) -> CartResponse:
    with customer_lock(principal.customer_id):
        command = SetCartLineQuantity(
            customer_id=principal.customer_id,
            product_id=product_id,
            quantity=body.quantity,
        )
        current_domain.process(command, asynchronous=False)
        return _cart_response(principal.customer_id)


@cart_router.delete("/{product_id}", response_model=CartResponse)
async def remove_cart_line(product_id: str, principal: Principal = Depends(current_principal)) -> CartResponse:
    with customer_lock(principal.customer_id):
        command = RemoveCartLine(customer_id=principal.customer_id, product_id=product_id)
        current_domain.process(command, asynchronous=False)
        return _cart_response(principal.customer_id)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    with customer_lock(principal.customer_id):
        command = ClearCart(customer_id=principal.customer_id)
        current_domain.process(command, asynchronous=False)
        return _cart_response(principal.customer_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(current_principal)) -> OrderResponse:
    """Check out the caller's cart.

    1. Snapshot the cart's products into order lines
    2. Price the order and persist it as pending
    3. Empty the cart
    """
    with customer_lock(principal.customer_id):
        command = PlaceOrder(
            customer_id=principal.customer_id,
            customer=json.dumps(body.customer.model_dump()),
        )
        order_id = current_domain.process(command, asynchronous=False)

    order = current_domain.repository_for(Order).find_by_id(order_id)
    return _order_response(order)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(principal: Principal = Depends(current_principal)) -> list[OrderResponse]:
    """The caller's orders, or every order for an administrator, newest first."""
    repo = current_domain.repository_for(Order)
    orders = repo.newest_first() if principal.is_admin else repo.placed_by(principal.customer_id)
    return [_order_response(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    order = current_domain.repository_for(Order).find_by_id(order_id)
    if not order.is_visible_to(principal.customer_id, is_admin=principal.is_admin):
        raise HTTPException(status_code=403, detail="Not authorized to view this order")
    return _order_response(order)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def change_order_status(
    order_id: str,
    body: ChangeOrderStatusRequest,
    principal: Principal = Depends(admin_principal),  # noqa: ARG001
) -> OrderResponse:
    command = ChangeOrderStatus(order_id=order_id, status=body.status.value)
    current_domain.process(command, asynchronous=False)

    order = current_domain.repository_for(Order).find_by_id(order_id)
    return _order_response(order)
