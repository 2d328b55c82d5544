"""Order status updates: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, List, String, Text
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.order.access import OrderAction, authorize, principal_from
from orders.order.order import Order, OrderStatus

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = Text(sanitize=False)  # validated after ownership is checked
    requested_by = Identifier(required=True)
    roles = List(content_type=String(max_length=20))


@orders.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        authorize(principal_from(command), OrderAction.UPDATE_STATUS, order.user_id)

        target = OrderStatus.parse(command.status)
        order.transition_status(target)
        repo.add(order)

        logger.info("Order status updated", order_id=str(order.id), new_status=target.value)
        return order
