"""Shopping Cart aggregate — one mutable cart per customer.

Lines point at catalogue products by id only; prices are looked up when the
cart is viewed or checked out, never stored here. The cart document outlives
checkout: placing an order empties its lines and the same cart is reused.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from ordering.cart.events import (
    CartCleared,
    CartLineAdded,
    CartLineQuantityChanged,
    CartLineRemoved,
)
from ordering.domain import ordering


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@ordering.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True, unique=True)
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(
            customer_id=customer_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    def add_line(self, product_id, quantity=1):
        """Add a product, merging into the existing line for that product."""
        quantity = quantity or 1
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_lines(CartLine(product_id=product_id, quantity=quantity))
            new_quantity = quantity

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                quantity_added=quantity,
                quantity=new_quantity,
            )
        )

    def set_line_quantity(self, product_id, quantity):
        """Replace a line's quantity; zero or less removes the line."""
        line = self.line_for(product_id)
        if line is None:
            raise ObjectNotFoundError("Item not found in cart")

        if quantity <= 0:
            self.remove_line(product_id)
            return

        previous_quantity = line.quantity
        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityChanged(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_line(self, product_id):
        """Remove the product's line. Removing an absent line is a no-op."""
        line = self.line_for(product_id)
        if line is None:
            return

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        """Empty the line collection. The cart itself is kept."""
        lines = list(self.lines)
        for line in lines:
            self.remove_lines(line)

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                lines_removed=len(lines),
                cleared_at=now,
            )
        )

    @property
    def is_empty(self):
        return not self.lines
