"""Orders bounded context: order lifecycle, ownership and listing.

Commands are handled synchronously so routes get the handler's result back,
and events reach their handlers inline once the unit of work commits.
"""

import structlog
from protean.domain import Domain

orders = Domain(
    name="orders",
    config={
        "event_processing": "sync",
        "command_processing": "sync",
        "databases": {"default": {"provider": "memory"}},
    },
)

logger = structlog.get_logger(__name__)


def init_domain() -> Domain:
    """Register every element and initialize adapters, once per process."""
    if orders.event_store.store is None:
        orders.init()
        logger.debug("Orders domain initialized")
    return orders
