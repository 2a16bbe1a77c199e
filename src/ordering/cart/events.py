"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="ShoppingCart")
class CartLineAdded:
    """A product was added to the cart, or its quantity was topped up."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineQuantityChanged:
    """The quantity of a cart line was replaced."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="ShoppingCart")
class CartLineRemoved:
    """A product line was taken out of the cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.event(part_of="ShoppingCart")
class CartCleared:
    """Every line was removed, either on request or after checkout."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    lines_removed = Integer(required=True)
    cleared_at = DateTime(required=True)
