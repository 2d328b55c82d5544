"""Single-order lookup."""

from protean.utils.globals import current_domain

from orders.auth import Principal
from orders.order.access import OrderAction, authorize
from orders.order.order import Order


def get_order(order_id: str, principal: Principal) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    authorize(principal, OrderAction.READ, order.user_id)
    return order
