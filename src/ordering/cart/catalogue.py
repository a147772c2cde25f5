"""Catalogue lookup used by the cart: live price/stock snapshots.

Ordering never holds on to catalogue state: each cart mutation asks for a
fresh snapshot and drops it when the operation ends.
"""

from dataclasses import dataclass

from protean.exceptions import DatabaseError
from sqlalchemy.exc import SQLAlchemyError

from catalogue.domain import catalogue
from catalogue.product.product import Product
from ordering.cart.errors import StoreUnavailable
from ordering.domain import logger

# Faults raised by a repository whose backing store cannot be reached
STORE_FAULTS = (DatabaseError, SQLAlchemyError)


@dataclass(frozen=True)
class ProductSnapshot:
    """Product state as read at decision time."""

    id: str
    name: str
    price: float
    stock: int


class CatalogueLookup:
    """Reads product snapshots from the catalogue domain's product repository."""

    def get_product(self, product_id) -> ProductSnapshot | None:
        try:
            with catalogue.domain_context():
                product = catalogue.repository_for(Product).get_or_none(str(product_id))
        except STORE_FAULTS as exc:
            logger.error("Catalogue lookup failed", product_id=str(product_id), error=str(exc))
            raise StoreUnavailable("catalogue", str(exc)) from exc

        if product is None:
            return None
        return ProductSnapshot(id=str(product.id), name=product.name, price=product.price, stock=product.stock)
