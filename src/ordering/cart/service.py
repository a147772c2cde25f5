"""Cart service: runs engine decisions against the catalogue and cart stores.

Each mutation is one read-modify-write cycle under the owner's lock:
fetch the live product snapshot, fetch the cart, let the engine decide,
persist the result in one unit of work. A rejection rolls the unit of work
back, so the stored cart is untouched.

Runs inside the ordering domain context.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from protean import UnitOfWork
from protean.utils.globals import current_domain

from ordering.cart import engine
from ordering.cart.cart import Cart
from ordering.cart.catalogue import STORE_FAULTS, CatalogueLookup, ProductSnapshot
from ordering.cart.errors import CartRejection, StoreUnavailable
from ordering.cart.locking import OwnerLocks
from ordering.cart.repository import CartRepository
from ordering.domain import logger


class CartService:
    def __init__(self, catalogue: CatalogueLookup | None = None, locks: OwnerLocks | None = None):
        self.catalogue = catalogue or CatalogueLookup()
        self.locks = locks or OwnerLocks()

    @contextmanager
    def _carts(self) -> Iterator[CartRepository]:
        """Cart repository, with store faults reported as StoreUnavailable."""
        try:
            yield current_domain.repository_for(Cart)
        except STORE_FAULTS as exc:
            logger.error("Cart store failed", error=str(exc))
            raise StoreUnavailable("cart", str(exc)) from exc

    def _mutate(
        self,
        action: str,
        owner_id,
        decide: Callable[[Cart | None, ProductSnapshot | None], Cart],
        product_id=None,
    ) -> Cart:
        with self.locks.hold(owner_id):
            product = self.catalogue.get_product(product_id) if product_id is not None else None
            try:
                with self._carts() as carts, UnitOfWork():
                    cart = decide(carts.get_for_owner(owner_id), product)
                    carts.add(cart)
            except CartRejection as exc:
                logger.info(
                    "Cart mutation rejected",
                    action=action,
                    owner_id=str(owner_id),
                    rejection=exc.kind.value,
                    **exc.context,
                )
                raise

        logger.info("Cart updated", action=action, owner_id=str(owner_id), items=len(cart.items), total=cart.total)
        return cart

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_cart(self, owner_id) -> Cart | None:
        with self._carts() as carts:
            return carts.get_for_owner(owner_id)

    def view_cart(self, owner_id) -> dict:
        """Cart as shown to its owner, with each line's live product details.

        A user without a cart sees an empty cart; nothing is stored for them.
        """
        cart = self.get_cart(owner_id)
        if cart is None:
            return {"items": [], "total": 0}

        view = cart.to_view()
        for entry in view["items"]:
            snapshot = self.catalogue.get_product(entry["product_id"])
            entry["product"] = (
                None
                if snapshot is None
                else {"name": snapshot.name, "price": snapshot.price, "stock": snapshot.stock}
            )
        return view

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, owner_id, product_id, quantity) -> Cart:
        return self._mutate(
            "add",
            owner_id,
            lambda cart, product: engine.resolve_add(cart, product, quantity, owner_id=owner_id),
            product_id=product_id,
        )

    def update_item(self, owner_id, product_id, quantity) -> Cart:
        return self._mutate(
            "update",
            owner_id,
            lambda cart, product: engine.resolve_update(cart, product_id, product, quantity),
            product_id=product_id,
        )

    def remove_item(self, owner_id, product_id) -> Cart:
        return self._mutate("remove", owner_id, lambda cart, _: engine.resolve_remove(cart, product_id))

    def clear_cart(self, owner_id) -> Cart:
        return self._mutate("clear", owner_id, lambda cart, _: engine.resolve_clear(cart))
