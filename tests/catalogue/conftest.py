import pytest
from catalogue.product.management import CatalogueService


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, ordering_bed):
    """Catalogue is the current domain; both stores are reset after each test."""
    with ordering_bed.domain_context():
        with catalogue_bed.domain_context():
            yield


@pytest.fixture()
def catalogue_service():
    return CatalogueService()
