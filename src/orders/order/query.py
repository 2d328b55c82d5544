"""Filtering, sorting and pagination over a set of orders.

The engine runs over whatever the caller hands it; the access-control layer
has already narrowed the set to the orders the principal may see.
"""

import math
from dataclasses import dataclass, field

from orders.order.order import Order

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"

# Wire name -> attribute name. Only scalar fields are sortable; anything else
# compares equal, which keeps the input order.
SORTABLE_FIELDS = {
    "id": "id",
    "userId": "user_id",
    "status": "status",
    "totalAmount": "total_amount",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
SORTABLE_FIELDS.update({attr: attr for attr in list(SORTABLE_FIELDS.values())})


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class OrderQuery:
    status: str | None = None
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(cls, page=None, limit=None, status=None, sort_by=None, sort_order=None) -> "OrderQuery":
        """Build a query from raw query-string values.

        Missing, non-numeric, zero or negative ``page``/``limit`` fall back to
        their defaults. Any ``sort_order`` other than ``asc`` means descending.
        """
        return cls(
            status=status or None,
            sort_by=sort_by or DEFAULT_SORT_BY,
            sort_order="asc" if sort_order == "asc" else "desc",
            page=_positive_int(page, DEFAULT_PAGE),
            limit=min(_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT),
        )


@dataclass
class OrderPage:
    orders: list[Order]
    page: int
    limit: int
    total: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        self.total_pages = math.ceil(self.total / self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def pagination(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }

    def to_wire(self) -> dict:
        return {
            "orders": [order.to_wire() for order in self.orders],
            "pagination": self.pagination,
        }


def _sort_key(sort_by: str):
    attribute = SORTABLE_FIELDS.get(sort_by)
    if attribute is None:
        return lambda order: 0
    return lambda order: getattr(order, attribute)


def run_query(orders, query: OrderQuery) -> OrderPage:
    if query.limit < 1 or query.page < 1:
        raise ValueError("page and limit must be positive")

    matched = list(orders)
    if query.status:
        matched = [order for order in matched if order.status == query.status]

    # sorted() is stable in both directions, so ties keep insertion order.
    matched = sorted(matched, key=_sort_key(query.sort_by), reverse=query.sort_order == "desc")

    start = (query.page - 1) * query.limit
    return OrderPage(
        orders=matched[start : start + query.limit],
        page=query.page,
        limit=query.limit,
        total=len(matched),
    )
