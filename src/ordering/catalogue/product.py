"""Product aggregate — the catalogue record carts point to and orders copy from."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from ordering.catalogue.events import ProductAdded, ProductRevised, ProductStockWithdrawn
from ordering.domain import ordering
from ordering.pricing import effective_price

DEFAULT_STOCK = 100


@ordering.aggregate
class Product:
    """Product aggregate root."""

    title: String(required=True, max_length=255)
    description: Text()
    category: String(max_length=100)
    price: Float(required=True, min_value=0.0)
    discount: Float(default=0.0, min_value=0.0, max_value=100.0)
    image: String(max_length=500, default="")
    stock: Integer(default=DEFAULT_STOCK, min_value=0)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def add(cls, title, price, discount=0.0, stock=DEFAULT_STOCK, description=None, category=None, image=""):
        now = datetime.now(UTC)
        product = cls(
            title=title,
            description=description,
            category=category,
            price=price,
            discount=discount or 0.0,
            image=image or "",
            stock=DEFAULT_STOCK if stock is None else stock,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                title=title,
                price=product.price,
                discount=product.discount,
                stock=product.stock,
                added_at=now,
            )
        )
        return product

    def effective_price(self):
        return effective_price(self.price, self.discount)

    def revise(self, title=None, price=None, discount=None, stock=None, image=None):
        """Apply a partial update; fields left as None keep their value."""
        previous_price = self.price

        if title is not None:
            self.title = title
        if price is not None:
            self.price = price
        if discount is not None:
            self.discount = discount
        if stock is not None:
            self.stock = stock
        if image is not None:
            self.image = image

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductRevised(
                product_id=str(self.id),
                title=self.title,
                previous_price=previous_price,
                price=self.price,
                discount=self.discount,
                stock=self.stock,
            )
        )

    def withdraw_stock(self, quantity):
        if quantity > self.stock:
            raise ValidationError(
                {"stock": [f"Insufficient stock for '{self.title}': requested {quantity}, available {self.stock}"]}
            )

        self.stock -= quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductStockWithdrawn(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.stock,
            )
        )

    def to_display(self) -> dict:
        """Live catalogue data shown next to cart and order lines."""
        return {
            "id": str(self.id),
            "title": self.title,
            "price": self.price,
            "discount": self.discount or 0.0,
            "image": self.image or "",
            "stock": self.stock,
            "effective_price": float(self.effective_price()),
        }
