"""Faker-based data generators for Locust load test scenarios.

Payloads match the camelCase field names accepted by the Storefront API's
Pydantic request schemas. Bearer tokens and product ids come from the
environment because the API has no endpoints to create either:

- LOADTEST_TOKENS: comma-separated customer tokens registered with the
  server through ORDERING_ACCESS_TOKENS
- LOADTEST_ADMIN_TOKEN: an administrator token, for the fulfillment user
- LOADTEST_PRODUCT_IDS: comma-separated ids, e.g. from `manage.py seed-catalogue`
"""

import os
import random

from faker import Faker

fake = Faker()


def _env_list(name: str) -> list[str]:
    return [value.strip() for value in os.environ.get(name, "").split(",") if value.strip()]


# ---------- Credentials ----------


def customer_token() -> str:
    """Pick one of the configured customer tokens."""
    tokens = _env_list("LOADTEST_TOKENS")
    if not tokens:
        raise RuntimeError("LOADTEST_TOKENS is not set")
    return random.choice(tokens)


def admin_token() -> str:
    token = os.environ.get("LOADTEST_ADMIN_TOKEN")
    if not token:
        raise RuntimeError("LOADTEST_ADMIN_TOKEN is not set")
    return token


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ---------- Cart ----------


def product_ids() -> list[str]:
    ids = _env_list("LOADTEST_PRODUCT_IDS")
    if not ids:
        raise RuntimeError("LOADTEST_PRODUCT_IDS is not set")
    return ids


def cart_line_data() -> dict:
    """Generate AddToCartRequest payload; quantity is sometimes omitted."""
    payload = {"productId": random.choice(product_ids())}
    if random.random() < 0.7:
        payload["quantity"] = random.randint(1, 3)
    return payload


def quantity_update() -> dict:
    """Generate UpdateCartLineRequest payload; zero or less removes the line."""
    return {"quantity": random.choice([-1, 0, 1, 2, 4])}


# ---------- Checkout ----------


def customer_details() -> dict:
    """Generate the CustomerSchema payload, optional fields included at random."""
    details = {
        "name": fake.name()[:255],
        "email": fake.email(),
        "phone": fake.phone_number()[:50],
        "address1": fake.street_address()[:255],
        "city": fake.city()[:100],
        "zip": fake.postcode()[:20],
        "country": fake.country_code(),
    }
    if random.random() < 0.3:
        details["address2"] = fake.secondary_address()[:255]
    if random.random() < 0.5:
        details["state"] = fake.state()[:100]
    return details


def checkout_data() -> dict:
    """Generate PlaceOrderRequest payload."""
    return {"customer": customer_details()}


# ---------- Fulfillment ----------

FULFILLMENT_PATH = ["processing", "shipped", "delivered"]


def status_data(status: str) -> dict:
    """Generate ChangeOrderStatusRequest payload."""
    return {"status": status}
