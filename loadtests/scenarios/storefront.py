"""Storefront load test scenarios.

Two stateful SequentialTaskSet journeys: a shopper filling a cart and
checking out, and an administrator advancing the newest orders through
fulfillment.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    FULFILLMENT_PATH,
    admin_token,
    auth_headers,
    cart_line_data,
    checkout_data,
    customer_token,
    quantity_update,
    status_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import FulfillmentState, ShopperState


class CartToCheckoutJourney(SequentialTaskSet):
    """View Cart -> Add Lines -> Change Quantity -> Checkout -> Read Order.

    Every cart call returns the priced cart view, so each step also exercises
    the pricing of live catalogue data.
    """

    def on_start(self):
        self.state = ShopperState(headers=auth_headers(customer_token()))

    @task
    def view_cart(self):
        with self.client.get(
            "/cart",
            headers=self.state.headers,
            catch_response=True,
            name="GET /cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_lines(self):
        for _ in range(random.randint(1, 3)):
            with self.client.post(
                "/cart",
                json=cart_line_data(),
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart",
            ) as resp:
                if resp.status_code == 200:
                    body = resp.json()
                    self.state.product_ids = [item["product"]["id"] for item in body["items"]]
                    self.state.cart_total = body["total"]
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def change_quantity(self):
        if not self.state.product_ids:
            return
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/cart/{product_id}",
            json=quantity_update(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/{productId}",
        ) as resp:
            if resp.status_code == 200:
                body = resp.json()
                self.state.product_ids = [item["product"]["id"] for item in body["items"]]
                self.state.cart_total = body["total"]
            else:
                resp.failure(f"Change quantity failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def checkout(self):
        with self.client.post(
            "/orders",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            elif resp.status_code == 400 and not self.state.product_ids:
                # Every line was removed by the quantity change
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def read_order(self):
        if not self.state.order_ids:
            return
        with self.client.get(
            f"/orders/{self.state.order_ids[-1]}",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read order failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def list_orders(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")
        self.interrupt()


class FulfillmentJourney(SequentialTaskSet):
    """List Orders -> Processing -> Shipped -> Delivered (administrator)."""

    def on_start(self):
        self.state = FulfillmentState(headers=auth_headers(admin_token()))

    @task
    def pick_order(self):
        with self.client.get(
            "/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders (admin)",
        ) as resp:
            pending = [order for order in resp.json() if order["status"] == "pending"] if resp.ok else []
            if not resp.ok:
                resp.failure(f"List orders failed: {resp.status_code} — {extract_error_detail(resp)}")
            if not pending:
                self.interrupt()
                return
            self.state.order_id = random.choice(pending)["id"]

    @task
    def advance(self):
        for status in FULFILLMENT_PATH:
            with self.client.put(
                f"/orders/{self.state.order_id}/status",
                json=status_data(status),
                headers=self.state.headers,
                catch_response=True,
                name="PUT /orders/{id}/status",
            ) as resp:
                if resp.status_code == 200:
                    self.state.current_status = status
                else:
                    resp.failure(f"Status change failed: {resp.status_code} — {extract_error_detail(resp)}")
                    break
        self.interrupt()


class ShopperUser(HttpUser):
    """Locust user simulating customers checking out."""

    wait_time = between(0.5, 2.0)
    weight = 10
    tasks = [CartToCheckoutJourney]


class FulfillmentUser(HttpUser):
    """Locust user simulating an administrator working through new orders."""

    wait_time = between(2.0, 5.0)
    weight = 1
    tasks = [FulfillmentJourney]
