import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.access import set_resolver
from ordering.access.static_adapter import StaticTokenResolver
from ordering.api.routes import cart_router, order_router
from ordering.catalogue.management import AddProduct
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture(autouse=True)
def tokens():
    resolver = StaticTokenResolver()
    resolver.register("tok-customer", "cust-001")
    resolver.register("tok-other", "cust-002")
    resolver.register("tok-admin", "admin-001", is_admin=True)
    set_resolver(resolver)
    return resolver


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def add_product():
    def _add(title="Desk Lamp", price=40.0, **kwargs):
        return current_domain.process(AddProduct(title=title, price=price, **kwargs), asynchronous=False)

    return _add
