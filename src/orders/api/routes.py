"""FastAPI routes for the Orders API. Every route requires a bearer token."""

import json

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from orders.api.dependencies import get_principal, read_optional_json
from orders.api.schemas import ERROR_RESPONSES, CreateOrderRequest, OrderListResponse, OrderResponse
from orders.auth import Principal
from orders.order.cancellation import CancelOrder
from orders.order.creation import CreateOrder
from orders.order.listing import list_orders as list_visible_orders
from orders.order.query import OrderQuery
from orders.order.retrieval import get_order as get_visible_order
from orders.order.status import UpdateOrderStatus


def success(data, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, "data": data})


order_router = APIRouter(prefix="/api/v1/orders", tags=["orders"], responses=ERROR_RESPONSES)


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, principal: Principal = Depends(get_principal)):
    command = CreateOrder(
        user_id=str(body.user_id),
        items=json.dumps([item.model_dump() for item in body.items]),
        total_amount=body.total_amount,
        requested_by=principal.user_id,
        roles=principal.role_names,
    )
    order = current_domain.process(command, asynchronous=False)
    return success(order.to_wire(), status_code=201)


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    page: str | None = None,
    limit: str | None = None,
    status: str | None = None,
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    principal: Principal = Depends(get_principal),
):
    query = OrderQuery.from_params(page=page, limit=limit, status=status, sort_by=sort_by, sort_order=sort_order)
    return success(list_visible_orders(principal, query).to_wire())


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(get_principal)):
    return success(get_visible_order(order_id, principal).to_wire())


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, request: Request, principal: Principal = Depends(get_principal)):
    # Read leniently: a non-owner gets 403 before the body is judged.
    payload = await read_optional_json(request)
    status = payload.get("status") if isinstance(payload, dict) else None
    command = UpdateOrderStatus(
        order_id=order_id,
        status=None if status is None else str(status),
        requested_by=principal.user_id,
        roles=principal.role_names,
    )
    order = current_domain.process(command, asynchronous=False)
    return success(order.to_wire())


@order_router.delete("/{order_id}", response_model=OrderResponse)
async def cancel_order(order_id: str, principal: Principal = Depends(get_principal)):
    command = CancelOrder(order_id=order_id, requested_by=principal.user_id, roles=principal.role_names)
    order = current_domain.process(command, asynchronous=False)
    return success(order.to_wire())
