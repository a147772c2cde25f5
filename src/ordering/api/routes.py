"""FastAPI routes for the Ordering domain: the signed-in user's cart.

The user's identity arrives from the authentication layer in front of this
service as the `X-User-Id` header; it is never derived here.

Handlers are plain functions so FastAPI runs them on its threadpool, where
the service's per-owner locks serialize concurrent edits of one cart.
"""

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from ordering.api.schemas import AddToCartRequest, CartResponse, MessageResponse, UpdateCartItemRequest
from ordering.cart.errors import CartRejection, RejectionKind, StoreUnavailable
from ordering.cart.service import CartService
from ordering.domain import logger

# Every rejection kind must have a status here
REJECTION_STATUS = {
    RejectionKind.PRODUCT_NOT_FOUND: 404,
    RejectionKind.CART_NOT_FOUND: 404,
    RejectionKind.ITEM_NOT_FOUND: 404,
    RejectionKind.INVALID_QUANTITY: 400,
    RejectionKind.INSUFFICIENT_STOCK: 400,
}


def get_cart_service(request: Request) -> CartService:
    return request.app.state.cart_service


def current_owner_id(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authorized, no user identity")
    return x_user_id


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("")
def get_cart(owner_id: str = Depends(current_owner_id), service: CartService = Depends(get_cart_service)) -> dict:
    return service.view_cart(owner_id)


@cart_router.post("", status_code=201, response_model=CartResponse)
def add_to_cart(
    body: AddToCartRequest,
    owner_id: str = Depends(current_owner_id),
    service: CartService = Depends(get_cart_service),
) -> CartResponse:
    cart = service.add_item(owner_id, body.product_id, body.quantity)
    return CartResponse(**cart.to_view())


@cart_router.put("/{product_id}", response_model=CartResponse)
def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    owner_id: str = Depends(current_owner_id),
    service: CartService = Depends(get_cart_service),
) -> CartResponse:
    cart = service.update_item(owner_id, product_id, body.quantity)
    return CartResponse(**cart.to_view())


@cart_router.delete("/{product_id}", response_model=CartResponse)
def remove_from_cart(
    product_id: str,
    owner_id: str = Depends(current_owner_id),
    service: CartService = Depends(get_cart_service),
) -> CartResponse:
    cart = service.remove_item(owner_id, product_id)
    return CartResponse(**cart.to_view())


@cart_router.delete("", response_model=MessageResponse)
def clear_cart(
    owner_id: str = Depends(current_owner_id), service: CartService = Depends(get_cart_service)
) -> MessageResponse:
    service.clear_cart(owner_id)
    return MessageResponse(message="Cart cleared")


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------
async def _cart_rejection_handler(request: Request, exc: CartRejection) -> JSONResponse:
    return JSONResponse(
        status_code=REJECTION_STATUS[exc.kind],
        content={"error": exc.kind.value, "message": str(exc)},
    )


async def _store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("Store unavailable", store=exc.store, reason=exc.reason, path=request.url.path)
    return JSONResponse(
        status_code=503,
        content={"error": "StoreUnavailable", "message": "Service temporarily unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CartRejection, _cart_rejection_handler)
    app.add_exception_handler(StoreUnavailable, _store_unavailable_handler)
