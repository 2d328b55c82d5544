"""Default in-process observers for order lifecycle events.

Notifications, inventory updates and broker fan-out would hang off these
events; for now the service records them in the log. A failing observer is
logged and never fails the request that raised the event.
"""

import functools

import structlog
from protean.utils.mixins import handle

from orders.domain import orders
from orders.order.events import EVENT_TYPES, OrderCreated, OrderStatusUpdated
from orders.order.order import Order

logger = structlog.get_logger(__name__)


def isolated(fn):
    """Log and swallow exceptions raised by an event observer."""

    @functools.wraps(fn)
    def wrapper(self, event):
        try:
            return fn(self, event)
        except Exception:
            logger.exception(
                "Order event observer failed",
                observer=fn.__qualname__,
                event_type=EVENT_TYPES[type(event)].value,
            )
            return None

    return wrapper


@orders.event_handler(part_of=Order)
class OrderEventsLogger:
    """Records order lifecycle events."""

    @handle(OrderCreated)
    @isolated
    def on_order_created(self, event: OrderCreated) -> None:
        logger.info(
            "Order created event received",
            event_type=EVENT_TYPES[OrderCreated].value,
            order_id=str(event.order_id),
            user_id=str(event.user_id),
            total_amount=event.total_amount,
        )

    @handle(OrderStatusUpdated)
    @isolated
    def on_order_status_updated(self, event: OrderStatusUpdated) -> None:
        logger.info(
            "Order status updated event received",
            event_type=EVENT_TYPES[OrderStatusUpdated].value,
            order_id=str(event.order_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )
