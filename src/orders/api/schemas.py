"""Pydantic request/response schemas for the Orders API.

These are external contracts, separate from the commands the routes build
from them. Response wire shapes are produced by ``Order.to_wire()`` and
``OrderPage.to_wire()``; the response models here document them.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from orders.order.order import MAX_PRICE, MAX_QUANTITY, MAX_TOTAL_AMOUNT


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(alias="productName", min_length=1, max_length=255)
    quantity: int = Field(ge=1, le=MAX_QUANTITY)
    price: float = Field(gt=0, le=MAX_PRICE)


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "userId": "0d2c6c3b-1e6b-4f0e-8a57-3b1f4c1e2d9a",
                    "items": [{"productName": "Black T-Shirt (M)", "quantity": 2, "price": 10.0}],
                }
            ]
        },
    )

    user_id: UUID = Field(alias="userId")
    items: list[OrderItemRequest] = Field(min_length=1)
    total_amount: float | None = Field(default=None, alias="totalAmount", gt=0, le=MAX_TOTAL_AMOUNT)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    productName: str
    quantity: int = Field(ge=1)
    price: float = Field(gt=0)


class OrderSchema(BaseModel):
    id: str
    userId: str
    items: list[OrderItemSchema]
    status: str
    totalAmount: float
    createdAt: str
    updatedAt: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "5b0f8a4e-6a1f-4c53-9d61-0a3e2d7c9f10",
                    "userId": "0d2c6c3b-1e6b-4f0e-8a57-3b1f4c1e2d9a",
                    "items": [{"productName": "Black T-Shirt (M)", "quantity": 2, "price": 10.0}],
                    "status": "created",
                    "totalAmount": 20.0,
                    "createdAt": "2024-05-01T12:00:00.000Z",
                    "updatedAt": "2024-05-01T12:00:00.000Z",
                }
            ]
        }
    }


class PaginationSchema(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


class OrderListSchema(BaseModel):
    orders: list[OrderSchema]
    pagination: PaginationSchema


class ErrorSchema(BaseModel):
    code: str
    message: str
    details: Any | None = None


class OrderResponse(BaseModel):
    success: bool = True
    data: OrderSchema


class OrderListResponse(BaseModel):
    success: bool = True
    data: OrderListSchema


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorSchema


ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}
