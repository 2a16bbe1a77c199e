"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    price: Float(required=True)
    discount: Float()
    stock: Integer()
    added_at: DateTime(required=True)


@ordering.event(part_of="Product")
class ProductRevised:
    """Price, discount, stock or presentation details of a product changed."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    title: String(max_length=255)
    previous_price: Float()
    price: Float()
    discount: Float()
    stock: Integer()


@ordering.event(part_of="Product")
class ProductStockWithdrawn:
    """Units were taken out of stock by an order."""

    __version__ = "v1"

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    remaining: Integer(required=True)
