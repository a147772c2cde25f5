import pytest
from catalogue.domain import catalogue
from catalogue.product.management import CatalogueService
from ordering.cart.service import CartService


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, ordering_bed):
    """Ordering is the current domain; both stores are reset after each test."""
    with catalogue_bed.domain_context():
        with ordering_bed.domain_context():
            yield


@pytest.fixture()
def catalogue_service():
    return CatalogueService()


@pytest.fixture()
def in_catalogue():
    """Run a block against the catalogue domain from an ordering test."""
    return catalogue.domain_context


@pytest.fixture()
def cart_service():
    return CartService()


@pytest.fixture()
def make_product(catalogue_service):
    """Factory: create a catalogue product and return it."""

    def _make(name="Widget", price=5.0, stock=10, **extra):
        with catalogue.domain_context():
            return catalogue_service.create_product(name=name, price=price, stock=stock, **extra)

    return _make
