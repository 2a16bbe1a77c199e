"""Order aggregate — the immutable receipt produced by checkout.

Lines are snapshots: title, price, discount and image are copied from the
catalogue when the order is placed and never refreshed, so later catalogue
changes cannot alter what was billed. Totals are computed once at placement.
Only the fulfillment status (and its delivery timestamp) changes afterwards.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING → SHIPPED
    PENDING, PROCESSING, SHIPPED → CANCELLED
    DELIVERED and CANCELLED are terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class CustomerDetails:
    """Shipping and contact details captured at checkout.

    Recorded on the order as given, independent of the customer's profile.
    """

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    phone = String(required=True, max_length=50)
    address1 = String(required=True, max_length=255)
    address2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A frozen copy of a product as it was sold, with the quantity bought."""

    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discount = Float(default=0.0)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    customer = ValueObject(CustomerDetails, required=True)
    subtotal = Float(required=True, min_value=0.0)
    tax = Float(required=True, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    paid_at = DateTime()
    delivered_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, lines_data, customer, totals):
        """Create a pending order from checkout data.

        Args:
            customer_id: The customer placing the order.
            lines_data: List of dicts with product_id, title, price,
                        discount, image, quantity.
            customer: CustomerDetails value object (or a dict of its fields).
            totals: pricing.Totals computed over the same lines.
        """
        if not lines_data:
            raise ValidationError({"cart": ["Cart is empty"]})

        if isinstance(customer, dict):
            customer = CustomerDetails(**customer)

        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id),
            lines=[OrderLine(**line) for line in lines_data],
            customer=customer,
            subtotal=float(totals.subtotal),
            tax=float(totals.tax),
            total=float(totals.total),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                line_count=len(lines_data),
                subtotal=order.subtotal,
                tax=order.tax,
                total=order.total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------
    def is_visible_to(self, customer_id, is_admin=False):
        return is_admin or str(self.customer_id) == str(customer_id)

    # -------------------------------------------------------------------
    # Fulfillment status
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status):
        return OrderStatus(target_status) in _VALID_TRANSITIONS.get(OrderStatus(self.status), set())

    def change_status(self, new_status, enforce_transitions=False):
        """Move the order to `new_status`.

        Without `enforce_transitions` any status may follow any other. Setting
        `delivered` stamps `delivered_at` every time it is set.
        """
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status '{new_status}'"]}) from None

        current = OrderStatus(self.status)
        if enforce_transitions and not self.can_transition_to(target):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        if target == OrderStatus.DELIVERED:
            self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
                delivered_at=self.delivered_at if target == OrderStatus.DELIVERED else None,
            )
        )
