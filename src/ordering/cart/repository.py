"""Cart store: carts are looked up by their owner, one cart per owner."""

from protean.exceptions import ObjectNotFoundError

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.repository(part_of=Cart)
class CartRepository:
    def get_for_owner(self, owner_id) -> Cart | None:
        try:
            return self.find_by(owner_id=str(owner_id))
        except ObjectNotFoundError:
            return None
