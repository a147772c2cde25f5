"""Pydantic request/response schemas for the Catalogue API.

Price and stock are taken as sent; the Product aggregate decides whether
they are valid.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Black T-Shirt",
                    "description": "Premium cotton crew-neck tee in black.",
                    "category": "apparel",
                    "brand": "Acme Apparel",
                    "price": 29.99,
                    "stock": 40,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    price: Any = None
    stock: Any = 0


class ChangePriceRequest(BaseModel):
    price: Any = None


class SetStockRequest(BaseModel):
    stock: Any = None


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    category: str | None = None
    brand: str | None = None
    price: float
    stock: int
    created_at: str
    updated_at: str


class StatusResponse(BaseModel):
    status: str = "ok"
