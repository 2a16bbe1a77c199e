"""Cart line management — commands and handler.

Carts are addressed by customer id: each customer owns exactly one cart.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.catalogue.product import Product
from ordering.domain import logger, ordering


@ordering.command(part_of="ShoppingCart")
class AddCartLine:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer()  # Defaults to 1 when missing or zero


@ordering.command(part_of="ShoppingCart")
class SetCartLineQuantity:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveCartLine:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddCartLine)
    def add_cart_line(self, command):
        # Unknown products are rejected before the cart is touched
        current_domain.repository_for(Product).find_by_id(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.customer_id)
        cart.add_line(product_id=command.product_id, quantity=command.quantity or 1)
        repo.add(cart)
        logger.info(
            "Cart line added",
            customer_id=str(command.customer_id),
            product_id=str(command.product_id),
            quantity=command.quantity or 1,
        )

    @handle(SetCartLineQuantity)
    def set_cart_line_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for(command.customer_id)
        cart.set_line_quantity(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveCartLine)
    def remove_cart_line(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for(command.customer_id)
        cart.remove_line(product_id=command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for(command.customer_id)
        cart.clear()
        repo.add(cart)
