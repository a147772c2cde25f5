"""Shopping cart aggregate: one per user, line items keyed by product.

A product appears at most once among the lines. Each line carries a
position so display order survives a round trip through the store. The
total is derived: it is folded over the current lines on every read and
is never stored.
"""

import copy
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer

from ordering.cart.errors import InvalidQuantity
from ordering.domain import ordering


def is_valid_quantity(quantity) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


@ordering.entity(part_of="Cart")
class CartLineItem:
    """One product's quantity and the unit price captured when the line was last touched."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    position = Integer(default=0)

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


@ordering.aggregate
class Cart:
    owner_id = Identifier(required=True, unique=True)
    items = HasMany(CartLineItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner_id):
        now = datetime.now(UTC)
        return cls(owner_id=owner_id, items=[], created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def lines(self) -> list[CartLineItem]:
        return sorted(self.items, key=lambda item: item.position)

    @property
    def total(self) -> float:
        return sum((item.subtotal for item in self.items), 0.0)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def item_for(self, product_id) -> CartLineItem | None:
        return next((item for item in self.items if str(item.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def place_item(self, product_id, quantity, unit_price) -> CartLineItem:
        """Insert a line, or overwrite an existing one in its current position."""
        if not is_valid_quantity(quantity):
            raise InvalidQuantity(product_id=str(product_id), quantity=quantity)

        now = datetime.now(UTC)
        existing = self.item_for(product_id)
        if existing is not None:
            with atomic_change(self):
                existing.quantity = quantity
                existing.unit_price = unit_price
                self.updated_at = now
            return existing

        position = max((item.position for item in self.items), default=-1) + 1
        item = CartLineItem(product_id=str(product_id), quantity=quantity, unit_price=unit_price, position=position)
        self.add_items(item)
        self.updated_at = now
        return item

    def drop_item(self, product_id) -> bool:
        """Remove the line for a product. Returns False when there was none."""
        existing = self.item_for(product_id)
        if existing is not None:
            self.remove_items(existing)
        self.updated_at = datetime.now(UTC)
        return existing is not None

    def empty(self) -> None:
        if self.items:
            self.remove_items(list(self.items))
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Copy & presentation
    # -------------------------------------------------------------------
    def copy(self) -> "Cart":
        # Carries the persistence state and pending line changes with it
        return copy.deepcopy(self)

    def to_view(self) -> dict:
        return {
            "id": str(self.id),
            "owner_id": str(self.owner_id),
            "items": [
                {"product_id": str(item.product_id), "quantity": item.quantity, "price": item.unit_price}
                for item in self.lines
            ],
            "total": self.total,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    def __repr__(self) -> str:
        return f"<Cart owner={self.owner_id!r} items={len(self.items)} total={self.total!r}>"
