"""Domain events for the Order aggregate.

Events are immutable facts raised by the aggregate in the same step as the
mutation that caused them. They are dispatched in-process to the event
handlers in ``orders.order.listeners`` after the unit of work commits.
"""

from enum import Enum

from protean.fields import DateTime, Float, Identifier, String, Text

from orders.domain import orders


class EventType(Enum):
    ORDER_CREATED = "order.created"
    ORDER_STATUS_UPDATED = "order.status.updated"


@orders.event(part_of="Order")
class OrderCreated:
    """A new order was placed."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = Float(required=True)
    status = String(required=True, max_length=20)
    items = Text(required=True, sanitize=False)  # JSON: list of item dicts
    created_at = DateTime(required=True)


@orders.event(part_of="Order")
class OrderStatusUpdated:
    """An order moved to a new status, cancellation included."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    old_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    updated_at = DateTime(required=True)


EVENT_TYPES = {
    OrderCreated: EventType.ORDER_CREATED,
    OrderStatusUpdated: EventType.ORDER_STATUS_UPDATED,
}
