"""Product aggregate: identity, descriptive details, live price and stock."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue


def _check_price(price) -> None:
    # Field coercion would accept "5" or True, so the type is checked first
    if isinstance(price, bool) or not isinstance(price, int | float):
        raise ValidationError({"price": ["Price must be a number"]})
    if price < 0:
        raise ValidationError({"price": ["Price cannot be negative"]})


def _check_stock(stock) -> None:
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError({"stock": ["Stock must be a whole number"]})
    if stock < 0:
        raise ValidationError({"stock": ["Stock cannot be negative"]})


@catalogue.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    brand = String(max_length=100)
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Name is required"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, price, stock=0, description=None, category=None, brand=None, product_id=None):
        if not name or not str(name).strip():
            raise ValidationError({"name": ["Name is required"]})
        _check_price(price)
        _check_stock(stock)

        now = datetime.now(UTC)
        values = dict(
            name=name,
            price=float(price),
            stock=stock,
            description=description,
            category=category,
            brand=brand,
            created_at=now,
            updated_at=now,
        )
        if product_id is not None:
            values["id"] = product_id
        return cls(**values)

    # -------------------------------------------------------------------
    # Price and stock
    # -------------------------------------------------------------------
    def change_price(self, price) -> None:
        _check_price(price)
        with atomic_change(self):
            self.price = float(price)
            self.updated_at = datetime.now(UTC)

    def set_stock(self, stock) -> None:
        _check_stock(stock)
        with atomic_change(self):
            self.stock = stock
            self.updated_at = datetime.now(UTC)
