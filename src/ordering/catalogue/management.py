"""Catalogue maintenance — commands and handler.

This is the administrative write path for products: it seeds the catalogue
and lets prices and stock change after orders have been placed.
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.catalogue.product import Product
from ordering.domain import logger, ordering


@ordering.command(part_of="Product")
class AddProduct:
    title: String(required=True, max_length=255)
    description: Text()
    category: String(max_length=100)
    price: Float(required=True, min_value=0.0)
    discount: Float(default=0.0)
    image: String(max_length=500)
    stock: Integer()


@ordering.command(part_of="Product")
class ReviseProduct:
    product_id: Identifier(required=True)
    title: String(max_length=255)
    price: Float(min_value=0.0)
    discount: Float()
    stock: Integer()
    image: String(max_length=500)


@ordering.command_handler(part_of=Product)
class CatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            title=command.title,
            price=command.price,
            discount=command.discount,
            stock=command.stock,
            description=command.description,
            category=command.category,
            image=command.image,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(ReviseProduct)
    def revise_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find_by_id(command.product_id)
        product.revise(
            title=command.title,
            price=command.price,
            discount=command.discount,
            stock=command.stock,
            image=command.image,
        )
        repo.add(product)
