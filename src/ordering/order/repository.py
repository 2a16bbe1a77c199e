"""Order repository — listings for customers and administrators."""

from protean.exceptions import ObjectNotFoundError

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.utils.queries import fetch_every


@ordering.repository(part_of=Order)
class OrderRepository:
    def placed_by(self, customer_id) -> list[Order]:
        """Orders of one customer, newest first."""
        return fetch_every(self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at"))

    def newest_first(self) -> list[Order]:
        """Every order, newest first."""
        return fetch_every(self._dao.query.order_by("-created_at"))

    def latest_for(self, customer_id) -> Order | None:
        orders = self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").limit(1).all().items
        return orders[0] if orders else None

    def find_by_id(self, order_id) -> Order:
        """Return the order or raise ObjectNotFoundError("Order not found")."""
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            raise ObjectNotFoundError("Order not found") from None
