"""Application tests for catalogue maintenance commands."""

import pytest
from ordering.catalogue.management import AddProduct, ReviseProduct
from ordering.catalogue.product import Product
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _add_product(**overrides):
    defaults = {"title": "Desk Lamp", "price": 40.0}
    defaults.update(overrides)
    return current_domain.process(AddProduct(**defaults), asynchronous=False)


class TestAddProductCommand:
    def test_add_returns_id_and_persists(self):
        product_id = _add_product(discount=5.0, stock=12, image="/img/lamp.jpg")
        product = current_domain.repository_for(Product).get(product_id)
        assert product.title == "Desk Lamp"
        assert product.discount == 5.0
        assert product.stock == 12
        assert product.image == "/img/lamp.jpg"

    def test_missing_stock_uses_default(self):
        product_id = _add_product()
        assert current_domain.repository_for(Product).get(product_id).stock == 100


class TestReviseProductCommand:
    def test_revise_changes_price(self):
        product_id = _add_product(price=100.0)
        current_domain.process(ReviseProduct(product_id=product_id, price=200.0), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).price == 200.0

    def test_revise_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(ReviseProduct(product_id="prod-404", price=1.0), asynchronous=False)


class TestProductRepository:
    def test_find_many_skips_unknown_ids(self):
        first = _add_product(title="Lamp")
        second = _add_product(title="Notebook")

        found = current_domain.repository_for(Product).find_many([first, second, "prod-404"])
        assert set(found) == {first, second}

    def test_find_many_with_no_ids(self):
        assert current_domain.repository_for(Product).find_many([]) == {}
