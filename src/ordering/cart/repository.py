"""Cart repository — the one-cart-per-customer lookup."""

from protean.exceptions import ObjectNotFoundError

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.utils.queries import fetch_every


@ordering.repository(part_of=ShoppingCart)
class CartRepository:
    def find_for(self, customer_id) -> ShoppingCart:
        """Return the customer's cart or raise ObjectNotFoundError("Cart not found")."""
        carts = self._dao.query.filter(customer_id=str(customer_id)).all().items
        if not carts:
            raise ObjectNotFoundError("Cart not found")
        return carts[0]

    def get_or_create(self, customer_id) -> ShoppingCart:
        """Return the customer's cart, persisting an empty one on first access."""
        try:
            return self.find_for(customer_id)
        except ObjectNotFoundError:
            cart = ShoppingCart.create(customer_id=str(customer_id))
            self.add(cart)
            return cart

    def with_lines(self) -> list[ShoppingCart]:
        """Carts that currently hold at least one line."""
        carts = fetch_every(self._dao.query.order_by("id"))
        return [cart for cart in carts if cart.lines]
