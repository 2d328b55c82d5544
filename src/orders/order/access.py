"""Access control for order operations.

Every use case consults this module before touching an order. Admins may act
on any order; everyone else only on orders they own.
"""

from enum import Enum

from orders.auth import Principal, parse_roles
from orders.exceptions import ForbiddenError


class OrderAction(Enum):
    CREATE = "create"
    READ = "read"
    LIST = "list"
    UPDATE_STATUS = "update_status"
    CANCEL = "cancel"


_DENIAL_MESSAGES = {
    OrderAction.CREATE: "You can only create orders for yourself",
    OrderAction.READ: "Insufficient permissions to access this order",
    OrderAction.UPDATE_STATUS: "Insufficient permissions to modify this order",
    OrderAction.CANCEL: "Insufficient permissions to cancel this order",
}


def is_allowed(principal: Principal, owner_id: str) -> bool:
    return principal.is_admin or str(owner_id) == principal.user_id


def authorize(principal: Principal, action: OrderAction, owner_id: str) -> None:
    """Raise ``ForbiddenError`` unless ``principal`` may perform ``action``
    on an order owned by ``owner_id``."""
    if action == OrderAction.LIST:
        raise ValueError("Listing is authorized by filtering; use visible_orders()")
    if not is_allowed(principal, owner_id):
        raise ForbiddenError(_DENIAL_MESSAGES[action])


def visible_orders(principal: Principal, orders):
    """Orders ``principal`` may see when listing."""
    if principal.is_admin:
        return list(orders)
    return [order for order in orders if order.user_id == principal.user_id]


def principal_from(command) -> Principal:
    """The principal a command was issued on behalf of."""
    return Principal(user_id=command.requested_by, roles=parse_roles(command.roles))
