"""Order cancellation: command and handler.

Orders are never deleted; ``DELETE /orders/{id}`` cancels.
"""

import structlog
from protean import handle
from protean.fields import Identifier, List, String
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.order.access import OrderAction, authorize, principal_from
from orders.order.order import Order

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    roles = List(content_type=String(max_length=20))


@orders.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        authorize(principal_from(command), OrderAction.CANCEL, order.user_id)

        order.cancel()
        repo.add(order)

        logger.info("Order cancelled", order_id=str(order.id))
        return order
