"""Order creation: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, List, String, Text
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.exceptions import UserNotFoundError
from orders.order.access import OrderAction, authorize, principal_from
from orders.order.order import Order
from orders.users import get_user_directory

logger = structlog.get_logger(__name__)


@orders.command(part_of="Order")
class CreateOrder:
    user_id = Identifier(required=True)
    items = Text(required=True, sanitize=False)  # JSON: list of item dicts
    total_amount = Float()
    requested_by = Identifier(required=True)
    roles = List(content_type=String(max_length=20))


@orders.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        authorize(principal_from(command), OrderAction.CREATE, command.user_id)

        if not get_user_directory().exists(command.user_id):
            raise UserNotFoundError()

        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        order = Order.create(
            user_id=command.user_id,
            items=items,
            total_amount=command.total_amount,
        )
        current_domain.repository_for(Order).add(order)

        logger.info("Order created", order_id=str(order.id), user_id=order.user_id)
        return order
