"""Checkout — turn the customer's cart into a placed order.

The handler runs inside a single unit of work: the new order, any stock
withdrawals and the emptied cart are committed together, or not at all. A
failure while building or saving the order leaves the cart exactly as it was.

Flow:
    1. Load the cart and resolve every line against the live catalogue
    2. Snapshot each resolved product into an order line
    3. Price the order from those same resolved lines
    4. Persist the order (status pending)
    5. Empty the cart's lines
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.view import build_cart_view
from ordering.catalogue.product import Product
from ordering.domain import logger, ordering
from ordering.order.order import Order
from ordering.policy import get_policy


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer = Text(required=True)  # JSON: shipping/contact details


def snapshot_lines(view):
    """Copy the catalogue data of each resolved line into order line dicts."""
    return [
        {
            "product_id": str(line.product.id),
            "title": line.product.title,
            "price": line.product.price,
            "discount": line.product.discount or 0.0,
            "image": line.product.image or "",
            "quantity": line.quantity,
        }
        for line in view.lines
    ]


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        try:
            cart = cart_repo.find_for(command.customer_id)
        except ObjectNotFoundError:
            cart = None

        view = build_cart_view(cart)
        if view.is_empty:
            raise ValidationError({"cart": ["Cart is empty"]})

        customer = json.loads(command.customer) if isinstance(command.customer, str) else command.customer
        order = Order.place(
            customer_id=command.customer_id,
            lines_data=snapshot_lines(view),
            customer=customer,
            totals=view.totals,
        )

        if get_policy().decrement_stock:
            product_repo = current_domain.repository_for(Product)
            for line in view.lines:
                line.product.withdraw_stock(line.quantity)
                product_repo.add(line.product)

        current_domain.repository_for(Order).add(order)

        if view.dropped:
            logger.warning(
                "Cart lines discarded at checkout, products no longer in catalogue",
                customer_id=str(command.customer_id),
                product_ids=view.dropped,
            )

        # Only once the order is staged in this unit of work
        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            lines=len(view.lines),
            subtotal=order.subtotal,
            tax=order.tax,
            total=order.total,
        )
        return str(order.id)
