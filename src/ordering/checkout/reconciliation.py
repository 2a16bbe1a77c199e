"""Cart reconciliation — compensating sweep for interrupted checkouts.

On stores without multi-document transactions an order can be written while
the follow-up write that empties the cart is lost. The sweep finds carts whose
lines are exactly the lines of the customer's latest order, placed after the
cart last changed, and empties them.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="ShoppingCart")
class ReconcileCarts:
    customer_id = Identifier()  # Limit the sweep to one customer


def _line_signature(lines):
    return sorted((str(line.product_id), line.quantity) for line in lines)


def already_ordered(cart, order):
    """True when `order` was placed from `cart` in its current state."""
    if order is None or not cart.lines:
        return False
    if cart.updated_at and order.created_at and cart.updated_at > order.created_at:
        return False
    return _line_signature(cart.lines) == _line_signature(order.lines)


@ordering.command_handler(part_of=ShoppingCart)
class ReconcileCartsHandler:
    @handle(ReconcileCarts)
    def reconcile_carts(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        order_repo = current_domain.repository_for(Order)

        if command.customer_id:
            try:
                carts = [cart_repo.find_for(command.customer_id)]
            except ObjectNotFoundError:
                carts = []
        else:
            carts = cart_repo.with_lines()

        reconciled = 0
        for cart in carts:
            if already_ordered(cart, order_repo.latest_for(cart.customer_id)):
                cart.clear()
                cart_repo.add(cart)
                reconciled += 1
                logger.warning(
                    "Cart emptied by reconciliation",
                    cart_id=str(cart.id),
                    customer_id=str(cart.customer_id),
                )

        return reconciled
