"""FastAPI endpoints for the Catalogue domain: catalogue owner operations."""

from fastapi import APIRouter, Depends, Request

from catalogue.api.schemas import (
    ChangePriceRequest,
    CreateProductRequest,
    ProductResponse,
    SetStockRequest,
    StatusResponse,
)
from catalogue.product.management import CatalogueService
from catalogue.product.product import Product

product_router = APIRouter(prefix="/products", tags=["products"])


def get_catalogue_service(request: Request) -> CatalogueService:
    return request.app.state.catalogue_service


def _response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        category=product.category,
        brand=product.brand,
        price=product.price,
        stock=product.stock,
        created_at=product.created_at.isoformat(),
        updated_at=product.updated_at.isoformat(),
    )


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse)
def create_product(
    body: CreateProductRequest, service: CatalogueService = Depends(get_catalogue_service)
) -> ProductResponse:
    product = service.create_product(
        name=body.name,
        price=body.price,
        stock=body.stock,
        description=body.description,
        category=body.category,
        brand=body.brand,
    )
    return _response(product)


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, service: CatalogueService = Depends(get_catalogue_service)) -> ProductResponse:
    return _response(service.get_product(product_id))


@product_router.put("/{product_id}/price", response_model=ProductResponse)
def change_price(
    product_id: str, body: ChangePriceRequest, service: CatalogueService = Depends(get_catalogue_service)
) -> ProductResponse:
    return _response(service.change_price(product_id, body.price))


@product_router.put("/{product_id}/stock", response_model=ProductResponse)
def set_stock(
    product_id: str, body: SetStockRequest, service: CatalogueService = Depends(get_catalogue_service)
) -> ProductResponse:
    return _response(service.set_stock(product_id, body.stock))


@product_router.delete("/{product_id}", response_model=StatusResponse)
def delete_product(product_id: str, service: CatalogueService = Depends(get_catalogue_service)) -> StatusResponse:
    service.delete_product(product_id)
    return StatusResponse()

