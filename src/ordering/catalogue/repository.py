"""Catalogue store — product lookups used by carts and checkout."""

from protean.exceptions import ObjectNotFoundError

from ordering.catalogue.product import Product
from ordering.domain import ordering


@ordering.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product:
        """Return the product or raise ObjectNotFoundError("Product not found")."""
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            raise ObjectNotFoundError("Product not found") from None

    def find_many(self, product_ids) -> dict[str, Product]:
        """Resolve several ids at once; ids that no longer resolve are left out."""
        wanted = {str(pid) for pid in product_ids}
        if not wanted:
            return {}
        products = self._dao.query.filter(id__in=list(wanted)).all().items
        return {str(product.id): product for product in products}
