"""Order persistence.

``add`` stores or overwrites an order, ``get`` raises ``ObjectNotFoundError``
for unknown ids, and ``all_orders`` returns a snapshot in insertion order.
There is no delete: cancellation is a status.
"""

from orders.domain import orders
from orders.order.order import Order


@orders.repository(part_of=Order)
class OrderRepository:
    def all_orders(self) -> list[Order]:
        return self.query.limit(None).all().items
