"""Rejections raised by the cart engine, and the store fault kept apart from them.

Every `CartRejection` is caller-correctable and terminal for its request:
the mutation is not applied. `StoreUnavailable` is an infrastructure fault
and is not a `CartRejection`.
"""

from enum import Enum


class RejectionKind(Enum):
    PRODUCT_NOT_FOUND = "ProductNotFound"
    CART_NOT_FOUND = "CartNotFound"
    ITEM_NOT_FOUND = "ItemNotFound"
    INVALID_QUANTITY = "InvalidQuantity"
    INSUFFICIENT_STOCK = "InsufficientStock"


class CartRejection(Exception):
    kind: RejectionKind
    message: str

    def __init__(self, message: str | None = None, **context):
        self.context = context
        super().__init__(message or self.message)


class ProductNotFound(CartRejection):
    kind = RejectionKind.PRODUCT_NOT_FOUND
    message = "Product not found"


class CartNotFound(CartRejection):
    kind = RejectionKind.CART_NOT_FOUND
    message = "Cart not found"


class ItemNotFound(CartRejection):
    kind = RejectionKind.ITEM_NOT_FOUND
    message = "Item not found in cart"


class InvalidQuantity(CartRejection):
    kind = RejectionKind.INVALID_QUANTITY
    message = "Quantity must be a positive integer"


class InsufficientStock(CartRejection):
    kind = RejectionKind.INSUFFICIENT_STOCK
    message = "Not enough stock"


class StoreUnavailable(Exception):
    """The catalogue or cart store could not be reached."""

    def __init__(self, store: str, reason: str):
        self.store = store
        self.reason = reason
        super().__init__(f"{store} store unavailable: {reason}")
