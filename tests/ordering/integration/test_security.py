"""Integration tests for request authentication and per-request log context."""

import pytest
import structlog
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from ordering.access import Principal
from ordering.api.security import admin_principal, current_principal
from ordering.utils.logging import clear_context


@pytest.fixture()
def secured_client():
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(principal: Principal = Depends(current_principal)):
        return {"principal": principal.customer_id, "context": structlog.contextvars.get_contextvars()}

    @app.get("/admin-only")
    async def admin_only(principal: Principal = Depends(admin_principal)):
        return {"context": structlog.contextvars.get_contextvars()}

    clear_context()
    return TestClient(app)


class TestLogContextBinding:
    def test_customer_id_is_visible_inside_the_route(self, secured_client):
        body = secured_client.get("/whoami", headers={"Authorization": "Bearer tok-customer"}).json()
        assert body["principal"] == "cust-001"
        assert body["context"] == {"customer_id": "cust-001"}

    def test_admin_routes_see_the_admin_id(self, secured_client):
        body = secured_client.get("/admin-only", headers={"Authorization": "Bearer tok-admin"}).json()
        assert body["context"] == {"customer_id": "admin-001"}


class TestCredentials:
    def test_missing_header_is_401(self, secured_client):
        response = secured_client.get("/whoami")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, no token"

    def test_wrong_scheme_is_401(self, secured_client):
        response = secured_client.get("/whoami", headers={"Authorization": "Basic tok-customer"})
        assert response.status_code == 401

    def test_unknown_token_is_401(self, secured_client):
        response = secured_client.get("/whoami", headers={"Authorization": "Bearer tok-nobody"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, token failed"

    def test_customer_on_admin_route_is_403(self, secured_client):
        response = secured_client.get("/admin-only", headers={"Authorization": "Bearer tok-customer"})
        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized as an admin"
