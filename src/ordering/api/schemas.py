"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from internal
Protean commands. Field names travel in camelCase on the wire
(`productId`, `deliveredAt`); snake_case is accepted on input as well.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ordering.order.order import OrderStatus


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ProductSchema(ApiModel):
    id: str
    title: str
    price: float
    discount: float = 0.0
    image: str = ""
    stock: int | None = None
    effective_price: float


class CustomerSchema(ApiModel):
    name: str
    email: str
    phone: str
    address1: str
    address2: str | None = None
    city: str
    state: str | None = None
    zip: str
    country: str


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(ApiModel):
    product_id: str
    quantity: int | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={"examples": [{"productId": "6f1c0d7e-prod", "quantity": 2}]},
    )


class UpdateCartLineRequest(ApiModel):
    quantity: int


class CartLineSchema(ApiModel):
    product: ProductSchema
    quantity: int


class CartResponse(ApiModel):
    items: list[CartLineSchema] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = 0.0

    @classmethod
    def from_view(cls, view) -> "CartResponse":
        return cls.model_validate(view.to_dict())


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(ApiModel):
    customer: CustomerSchema

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "customer": {
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "phone": "+44 20 7946 0000",
                        "address1": "12 St James's Square",
                        "city": "London",
                        "zip": "SW1Y 4JH",
                        "country": "GB",
                    }
                }
            ]
        },
    )


class ChangeOrderStatusRequest(ApiModel):
    status: OrderStatus


class OrderLineSchema(ApiModel):
    product_id: str
    title: str
    price: float
    discount: float = 0.0
    image: str | None = None
    quantity: int
    product: ProductSchema | None = None  # Live catalogue record, display only


class OrderResponse(ApiModel):
    id: str
    customer_id: str
    items: list[OrderLineSchema]
    customer: CustomerSchema
    subtotal: float
    tax: float
    total: float
    status: OrderStatus
    paid_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order, products=None) -> "OrderResponse":
        """Build the response from an order and a `{product_id: Product}` map."""
        products = products or {}
        items = []
        for line in order.lines:
            product = products.get(str(line.product_id))
            items.append(
                OrderLineSchema(
                    product_id=str(line.product_id),
                    title=line.title,
                    price=line.price,
                    discount=line.discount or 0.0,
                    image=line.image,
                    quantity=line.quantity,
                    product=ProductSchema.model_validate(product.to_display()) if product else None,
                )
            )

        customer = order.customer
        return cls(
            id=str(order.id),
            customer_id=str(order.customer_id),
            items=items,
            customer=CustomerSchema(
                name=customer.name,
                email=customer.email,
                phone=customer.phone,
                address1=customer.address1,
                address2=customer.address2,
                city=customer.city,
                state=customer.state,
                zip=customer.zip,
                country=customer.country,
            ),
            subtotal=order.subtotal,
            tax=order.tax,
            total=order.total,
            status=OrderStatus(order.status),
            paid_at=order.paid_at,
            delivered_at=order.delivered_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
