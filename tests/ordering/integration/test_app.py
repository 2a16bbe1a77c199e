"""Smoke tests for the shipped Storefront application."""

import importlib
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from ordering.domain import ordering

CUSTOMER = {"Authorization": "Bearer tok-customer"}


@pytest.fixture(scope="module")
def storefront_app():
    # The test session has already initialized the domain
    with patch.object(ordering, "init"):
        module = importlib.import_module("app")
    return module.app


@pytest.fixture()
def app_client(storefront_app):
    return TestClient(storefront_app)


class TestHealth:
    def test_health(self, app_client):
        response = app_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "ordering"}


class TestRouting:
    def test_cart_is_served(self, app_client):
        response = app_client.get("/cart", headers=CUSTOMER)
        assert response.status_code == 200
        assert response.json() == {"items": [], "subtotal": 0.0, "tax": 0.0, "total": 0.0}

    def test_unauthenticated_is_401(self, app_client):
        assert app_client.get("/orders").status_code == 401

    def test_domain_not_found_maps_to_404(self, app_client):
        assert app_client.get("/orders/ord-404", headers=CUSTOMER).status_code == 404

    def test_empty_checkout_maps_to_400(self, app_client, customer_details):
        response = app_client.post("/orders", json={"customer": customer_details}, headers=CUSTOMER)
        assert response.status_code == 400


class TestCors:
    def test_cors_headers(self, app_client):
        response = app_client.get("/health", headers={"Origin": "http://shop.example.com"})
        assert response.headers["access-control-allow-origin"] in ("*", "http://shop.example.com")
