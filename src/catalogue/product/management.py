"""Catalogue owner operations: create, reprice, restock and delete products.

Runs inside the catalogue domain context; `get` raises ObjectNotFoundError
for an unknown product id.
"""

from protean.utils.globals import current_domain

from catalogue.domain import logger
from catalogue.product.product import Product


class CatalogueService:
    def _products(self):
        return current_domain.repository_for(Product)

    def create_product(self, name, price, stock=0, description=None, category=None, brand=None) -> Product:
        product = Product.create(
            name=name,
            price=price,
            stock=stock,
            description=description,
            category=category,
            brand=brand,
        )
        self._products().add(product)

        logger.info("Product created", product_id=product.id, price=product.price, stock=product.stock)
        return product

    def get_product(self, product_id: str) -> Product:
        return self._products().get(product_id)

    def change_price(self, product_id: str, price) -> Product:
        repo = self._products()
        product = repo.get(product_id)
        previous_price = product.price
        product.change_price(price)
        repo.add(product)

        logger.info("Product repriced", product_id=product_id, previous_price=previous_price, price=product.price)
        return product

    def set_stock(self, product_id: str, stock) -> Product:
        repo = self._products()
        product = repo.get(product_id)
        product.set_stock(stock)
        repo.add(product)

        logger.info("Product stock set", product_id=product_id, stock=product.stock)
        return product

    def delete_product(self, product_id: str) -> None:
        repo = self._products()
        repo._dao.delete(repo.get(product_id))

        logger.info("Product deleted", product_id=product_id)
