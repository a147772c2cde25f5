"""Pydantic request/response schemas for the Cart API.

These are external contracts, separate from the internal Cart aggregate.
Quantities are accepted as-is so the cart engine, not request parsing,
decides whether they are valid. The product id is read as `productId` or
`product_id`.
"""

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str = Field(alias="productId")
    quantity: Any = None

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "productId": "6f1c2a7e-59b4-4a8e-9a53-0d4f3f5e2b11",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartItemRequest(BaseModel):
    quantity: Any = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    quantity: int
    price: float


class CartResponse(BaseModel):
    id: str
    owner_id: str
    items: list[CartLineSchema]
    total: float
    created_at: str
    updated_at: str


class MessageResponse(BaseModel):
    message: str
