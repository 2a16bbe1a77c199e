"""Order fulfillment status — command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order, OrderStatus
from ordering.policy import get_policy


@ordering.command(part_of="Order")
class ChangeOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@ordering.command_handler(part_of=Order)
class ChangeOrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_by_id(command.order_id)
        previous_status = order.status
        order.change_status(
            command.status,
            enforce_transitions=get_policy().enforce_status_transitions,
        )
        repo.add(order)
        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=order.status,
        )
