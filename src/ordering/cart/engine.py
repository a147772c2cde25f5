"""Cart engine: decides how a cart changes in response to a requested mutation.

Every function here is pure: it takes the current cart (or None when the
user has none yet) and a product snapshot taken at decision time, and either
returns a new Cart or raises a CartRejection. The cart passed in is never
modified, so a rejection leaves the caller's state exactly as it was.

Adding a product that is already in the cart sets the line's quantity to
the requested value. It does not increment.
"""

from ordering.cart.cart import Cart, is_valid_quantity
from ordering.cart.catalogue import ProductSnapshot
from ordering.cart.errors import (
    CartNotFound,
    InsufficientStock,
    InvalidQuantity,
    ItemNotFound,
    ProductNotFound,
)


def _check_quantity(requested_qty, product_id) -> None:
    if not is_valid_quantity(requested_qty):
        raise InvalidQuantity(product_id=product_id, quantity=requested_qty)


def _check_stock(product: ProductSnapshot, requested_qty) -> None:
    if requested_qty > product.stock:
        raise InsufficientStock(product_id=product.id, requested=requested_qty, available=product.stock)


def resolve_add(cart: Cart | None, product: ProductSnapshot | None, requested_qty, owner_id=None) -> Cart:
    """Put `requested_qty` of a product in the cart, creating the cart if needed.

    Checks run in order: quantity, product existence, stock ceiling.
    """
    _check_quantity(requested_qty, product.id if product else None)
    if product is None:
        raise ProductNotFound()
    _check_stock(product, requested_qty)

    if cart is None:
        if owner_id is None:
            raise ValueError("owner_id is required to create a cart")
        new_cart = Cart.create(owner_id=owner_id)
    else:
        new_cart = cart.copy()

    new_cart.place_item(product.id, requested_qty, product.price)
    return new_cart


def resolve_update(cart: Cart | None, product_id, product: ProductSnapshot | None, requested_qty) -> Cart:
    """Set the quantity of an existing line and refresh its price snapshot.

    Checks run in order: cart existence, product existence, quantity, stock
    ceiling, line existence.
    """
    if cart is None:
        raise CartNotFound()
    if product is None:
        raise ProductNotFound(product_id=str(product_id))
    _check_quantity(requested_qty, product_id)
    _check_stock(product, requested_qty)
    if cart.item_for(product_id) is None:
        raise ItemNotFound(product_id=str(product_id))

    new_cart = cart.copy()
    new_cart.place_item(product_id, requested_qty, product.price)
    return new_cart


def resolve_remove(cart: Cart | None, product_id) -> Cart:
    """Drop the line for a product. Removing a product that is not in the cart succeeds."""
    if cart is None:
        raise CartNotFound()

    new_cart = cart.copy()
    new_cart.drop_item(product_id)
    return new_cart


def resolve_clear(cart: Cart | None) -> Cart:
    """Empty the cart in place of deleting it."""
    if cart is None:
        raise CartNotFound()

    new_cart = cart.copy()
    new_cart.empty()
    return new_cart
