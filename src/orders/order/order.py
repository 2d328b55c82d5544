"""Order aggregate: the core of the orders service.

The Order owns its line items, computes its total and guards its own status.
Every mutation raises a domain event alongside the state change.

State Machine (4 states):
    CREATED ⇄ IN_PROGRESS → COMPLETED
    CANCELLED (from CREATED or IN_PROGRESS)

COMPLETED and CANCELLED are terminal. Between non-terminal states any move is
accepted, including IN_PROGRESS → CREATED.
"""

import json
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from uuid import UUID

from protean import invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, List, String, ValueObject

from orders.domain import orders
from orders.order.events import OrderCreated, OrderStatusUpdated

MAX_QUANTITY = 1_000_000
MAX_PRICE = 1_000_000_000.0
MAX_TOTAL_AMOUNT = 1_000_000_000_000.0
CENTS = Decimal("0.01")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    CREATED = "created"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        """Return the status for ``value`` or raise ``ValidationError``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError({"status": [f"Invalid status: {value!r}. Allowed: {allowed}"]}) from None


_TERMINAL_STATES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


def utcnow() -> datetime:
    return datetime.now(UTC)


def isoformat(value: datetime) -> str:
    """Render a timestamp the way API clients expect: ``2024-01-31T12:00:00.000Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@orders.value_object(part_of="Order")
class OrderItem:
    """A line item: product name, quantity and unit price.

    Prices are captured when the order is placed and never change afterwards.
    """

    product_name = String(required=True, max_length=255, sanitize=False)
    quantity = Integer(required=True, min_value=1, max_value=MAX_QUANTITY)
    price = Float(required=True, max_value=MAX_PRICE)

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["must be greater than 0"]})

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_wire(self) -> dict:
        return {"productName": self.product_name, "quantity": self.quantity, "price": self.price}


def _build_items(items) -> list[OrderItem]:
    """Coerce dicts (wire or attribute keys) into ``OrderItem`` values.

    Errors are keyed by position, e.g. ``{"items.0.price": [...]}``.
    """
    built, messages = [], {}
    for index, item in enumerate(items or []):
        if isinstance(item, OrderItem):
            built.append(item)
            continue
        if not isinstance(item, dict):
            messages[f"items.{index}"] = ["must be an object"]
            continue
        try:
            built.append(
                OrderItem(
                    product_name=item.get("product_name", item.get("productName")),
                    quantity=item.get("quantity"),
                    price=item.get("price"),
                )
            )
        except ValidationError as exc:
            for field, errors in exc.messages.items():
                messages.setdefault(f"items.{index}.{field}", []).extend(errors)
    if messages:
        raise ValidationError(messages)
    return built


def calculate_total(items) -> float:
    """Sum of price × quantity, rounded half-up to the currency's minimum unit.

    Item prices and quantities are bounded, so the sum always fits the
    decimal context.
    """
    total = sum((Decimal(str(item.price)) * item.quantity for item in items), Decimal("0"))
    return float(total.quantize(CENTS, rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@orders.aggregate
class Order:
    user_id = Identifier(required=True)
    items = List(content_type=ValueObject(OrderItem), required=True)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.CREATED.value,
    )
    total_amount = Float(required=True, max_value=MAX_TOTAL_AMOUNT)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    @invariant.post
    def total_amount_must_be_positive(self):
        if self.total_amount is not None and self.total_amount <= 0:
            raise ValidationError({"total_amount": ["must be greater than 0"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, items, total_amount=None) -> "Order":
        """Create a new order in CREATED state.

        Args:
            user_id: UUID of the owning user.
            items: Sequence of ``OrderItem`` or dicts with product name,
                   quantity and price.
            total_amount: Optional explicit total. When omitted it is
                          computed as the sum of price × quantity.

        Raises:
            ValidationError: if any field is malformed.
        """
        try:
            user_id = str(UUID(str(user_id)))
        except ValueError:
            raise ValidationError({"user_id": ["must be a valid UUID"]}) from None

        line_items = _build_items(items)
        if not line_items:
            raise ValidationError({"items": ["Order must contain at least one item"]})
        if total_amount is None:
            total_amount = calculate_total(line_items)

        now = utcnow()
        order = cls(
            user_id=user_id,
            items=line_items,
            status=OrderStatus.CREATED.value,
            total_amount=total_amount,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                user_id=order.user_id,
                total_amount=order.total_amount,
                status=order.status,
                items=json.dumps([item.to_wire() for item in line_items]),
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    @property
    def can_be_modified(self) -> bool:
        return self.status == OrderStatus.CREATED.value

    def transition_status(self, new_status) -> str:
        """Move the order to ``new_status`` and return the previous status."""
        current = OrderStatus(self.status)
        if current.is_terminal:
            raise InvalidOperationError(f"Cannot change the status of a {current.value} order")
        target = OrderStatus.parse(new_status)
        return self._move_to(target)

    def cancel(self) -> str:
        """Cancel the order and return the previous status."""
        current = OrderStatus(self.status)
        if current == OrderStatus.COMPLETED:
            raise InvalidOperationError("Cannot cancel a completed order")
        if current == OrderStatus.CANCELLED:
            raise InvalidOperationError("Order is already cancelled")
        return self._move_to(OrderStatus.CANCELLED)

    def _move_to(self, target: OrderStatus) -> str:
        previous = self.status
        now = utcnow()
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusUpdated(
                order_id=str(self.id),
                user_id=self.user_id,
                old_status=previous,
                new_status=target.value,
                updated_at=now,
            )
        )
        return previous

    def to_wire(self) -> dict:
        return {
            "id": str(self.id),
            "userId": self.user_id,
            "items": [item.to_wire() for item in self.items],
            "status": self.status,
            "totalAmount": self.total_amount,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
