"""Pickup order load test scenarios.

Each journey sets up its own vendor, shop and menu, then drives orders
through the lifecycle the way a stall and its customers would.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    account_data,
    cancellation_note,
    category_titles,
    create_shop_data,
    edit_shop_data,
    order_data,
    product_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CustomerState, PickupState
from loadtests.scenarios.vendor import ensure_locations


def open_stall(client, state) -> None:
    """Register a vendor and a customer and open a shop with one product."""
    ensure_locations(client)
    state.vendor_id = client.post("/accounts", json=account_data("Vendor"), name="POST /accounts").json()[
        "account_id"
    ]
    state.customer_id = client.post("/accounts", json=account_data("Customer"), name="POST /accounts").json()[
        "account_id"
    ]

    shop = create_shop_data(state.vendor_id)
    state.shop_id = client.post("/shops", json=shop, name="POST /shops").json()["shop_id"]
    categories = category_titles(2)
    client.put(
        f"/shops/{state.shop_id}",
        json=edit_shop_data(state.vendor_id, shop["name"], categories),
        name="PUT /shops/{id}",
    )
    state.product_id = client.post(
        f"/shops/{state.shop_id}/products",
        json=product_data(state.vendor_id, len(categories)),
        name="POST /shops/{id}/products",
    ).json()["product_id"]


class PickupLifecycleJourney(SequentialTaskSet):
    """Place Order -> Prepare -> Ready -> Collect.

    Generates events: OrderPlaced, OrderPreparing, OrderReady, OrderCollected.
    """

    def on_start(self):
        self.state = PickupState()
        open_stall(self.client, self.state)

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.customer_id, self.state.shop_id, self.state.product_id),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def _advance(self, action, status):
        with self.client.put(
            f"/orders/{self.state.order_id}/{action}",
            json={"vendor_id": self.state.vendor_id},
            catch_response=True,
            name=f"PUT /orders/{{id}}/{action}",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"{action} failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def prepare(self):
        self._advance("prepare", "Preparing")

    @task
    def ready(self):
        self._advance("ready", "Ready")

    @task
    def check_board(self):
        with self.client.get(
            f"/shops/{self.state.shop_id}/orders",
            catch_response=True,
            name="GET /shops/{id}/orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order board failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def collect(self):
        self._advance("collect", "Collected")

    @task
    def done(self):
        self.interrupt()


class CancellationJourney(SequentialTaskSet):
    """Place Order -> Cancel -> Cancel again (rejected) -> Order list.

    Generates events: OrderPlaced, OrderCancelled.
    """

    def on_start(self):
        self.state = PickupState()
        open_stall(self.client, self.state)

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.customer_id, self.state.shop_id, self.state.product_id),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def cancel(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/cancel",
            json={"customer_id": self.state.customer_id, "note": cancellation_note()},
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "Cancelled"
            else:
                resp.failure(f"Cancel failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def cancel_again(self):
        with self.client.put(
            f"/orders/{self.state.order_id}/cancel",
            json={"customer_id": self.state.customer_id},
            catch_response=True,
            name="PUT /orders/{id}/cancel [terminal]",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Expected 400 cancelling a cancelled order, got {resp.status_code}")

    @task
    def list_orders(self):
        with self.client.get(
            "/orders",
            params={"customer_id": self.state.customer_id},
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif not resp.json()["history"]:
                resp.failure("Cancelled order missing from history")

    @task
    def done(self):
        self.interrupt()


class BrowsingJourney(SequentialTaskSet):
    """Browse a catalog, toggle favourites and order a favourite."""

    def on_start(self):
        stall = PickupState()
        open_stall(self.client, stall)
        self.state = CustomerState(customer_id=stall.customer_id, shop_id=stall.shop_id)

    @task
    def browse(self):
        with self.client.get(
            f"/shops/{self.state.shop_id}/catalog",
            catch_response=True,
            name="GET /shops/{id}/catalog",
        ) as resp:
            if resp.status_code == 200:
                self.state.product_ids = [
                    product["product_id"] for section in resp.json()["sections"] for product in section["products"]
                ]
            else:
                resp.failure(f"Browse failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task(2)
    def toggle_favourite(self):
        if not self.state.product_ids:
            return
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/accounts/{self.state.customer_id}/favourites/{product_id}",
            catch_response=True,
            name="PUT /accounts/{id}/favourites/{pid}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Toggle favourite failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["is_favourite"]:
                self.state.favourite_ids.add(product_id)
            else:
                self.state.favourite_ids.discard(product_id)

    @task
    def order_favourite(self):
        if not self.state.favourite_ids:
            return
        product_id = random.choice(sorted(self.state.favourite_ids))
        with self.client.post(
            "/orders",
            json=order_data(self.state.customer_id, self.state.shop_id, product_id),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
            else:
                resp.failure(f"Order favourite failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class PickupUser(HttpUser):
    """Customers ordering and stalls working through their boards."""

    wait_time = between(1, 2)
    tasks = {PickupLifecycleJourney: 5, CancellationJourney: 2, BrowsingJourney: 3}
