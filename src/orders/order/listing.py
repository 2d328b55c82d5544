"""Order listing: ownership filter, then status filter, sort and paginate."""

from protean.utils.globals import current_domain

from orders.auth import Principal
from orders.order.access import visible_orders
from orders.order.order import Order
from orders.order.query import OrderPage, OrderQuery, run_query


def list_orders(principal: Principal, query: OrderQuery) -> OrderPage:
    candidates = visible_orders(principal, current_domain.repository_for(Order).all_orders())
    return run_query(candidates, query)
