"""Vendor load test scenarios.

A vendor registers, opens a shop at a pickup location, builds a menu and then
keeps it tidy: reordering, restocking and closing for a break.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    PICKUP_LOCATIONS,
    account_data,
    category_titles,
    create_shop_data,
    edit_shop_data,
    product_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import VendorState


def ensure_locations(client) -> None:
    """Register every pickup location. Already-registered ones answer 400."""
    for name in PICKUP_LOCATIONS:
        with client.post(
            "/locations",
            json={"name": name},
            catch_response=True,
            name="POST /locations",
        ) as resp:
            if resp.status_code in (201, 400):
                resp.success()
            else:
                resp.failure(f"Create location failed: {resp.status_code}: {extract_error_detail(resp)}")


class ShopSetupJourney(SequentialTaskSet):
    """Register Vendor -> Create Shop -> Edit Shop -> Add Products -> Reorder
    -> Out of Stock -> Close -> Open.

    Generates events: AccountRegistered, ShopCreated, ShopDetailsUpdated,
    ProductAdded (x4), ProductsReordered, ProductStockChanged,
    ShopOperatingStatusChanged (x2).
    """

    def on_start(self):
        self.state = VendorState()
        ensure_locations(self.client)

    @task
    def register_vendor(self):
        with self.client.post(
            "/accounts",
            json=account_data("Vendor"),
            catch_response=True,
            name="POST /accounts",
        ) as resp:
            if resp.status_code == 201:
                self.state.vendor_id = resp.json()["account_id"]
            else:
                resp.failure(f"Register vendor failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_shop(self):
        payload = create_shop_data(self.state.vendor_id)
        with self.client.post(
            "/shops",
            json=payload,
            catch_response=True,
            name="POST /shops",
        ) as resp:
            if resp.status_code == 201:
                self.state.shop_id = resp.json()["shop_id"]
                self.state.shop_name = payload["name"]
            else:
                resp.failure(f"Create shop failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def edit_shop(self):
        categories = category_titles(random.randint(2, 4))
        with self.client.put(
            f"/shops/{self.state.shop_id}",
            json=edit_shop_data(self.state.vendor_id, self.state.shop_name, categories),
            catch_response=True,
            name="PUT /shops/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.categories = categories
            else:
                resp.failure(f"Edit shop failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task(4)
    def add_product(self):
        with self.client.post(
            f"/shops/{self.state.shop_id}/products",
            json=product_data(self.state.vendor_id, len(self.state.categories)),
            catch_response=True,
            name="POST /shops/{id}/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["product_id"])
            else:
                resp.failure(f"Add product failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def view_catalog(self):
        with self.client.get(
            f"/shops/{self.state.shop_id}/catalog",
            catch_response=True,
            name="GET /shops/{id}/catalog",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View catalog failed: {resp.status_code}: {extract_error_detail(resp)}")
                return
            self.sections = resp.json()["sections"]

    @task
    def reorder_largest_category(self):
        sections = getattr(self, "sections", [])
        section = max(sections, key=lambda s: len(s["products"]), default=None)
        if section is None or len(section["products"]) < 2:
            return
        with self.client.put(
            f"/shops/{self.state.shop_id}/categories/{section['ordering_index']}/order",
            json={
                "owner_id": self.state.vendor_id,
                "source_positions": [len(section["products"]) - 1],
                "destination": 0,
            },
            catch_response=True,
            name="PUT /shops/{id}/categories/{index}/order",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Reorder products failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def mark_out_of_stock(self):
        if not self.state.product_ids:
            return
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/shops/{self.state.shop_id}/products/{product_id}/stock",
            json={"owner_id": self.state.vendor_id, "is_out_of_stock": True},
            catch_response=True,
            name="PUT /shops/{id}/products/{pid}/stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Set stock failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def close_shop(self):
        with self.client.put(
            f"/shops/{self.state.shop_id}/close",
            json={"owner_id": self.state.vendor_id},
            catch_response=True,
            name="PUT /shops/{id}/close",
        ) as resp:
            if resp.status_code == 200:
                self.state.is_closed = True
            else:
                resp.failure(f"Close shop failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def open_shop(self):
        with self.client.put(
            f"/shops/{self.state.shop_id}/open",
            json={"owner_id": self.state.vendor_id},
            catch_response=True,
            name="PUT /shops/{id}/open",
        ) as resp:
            if resp.status_code == 200:
                self.state.is_closed = False
            else:
                resp.failure(f"Open shop failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class InvalidShopEditJourney(SequentialTaskSet):
    """Edits that break one shop rule each. Every edit must answer 400."""

    def on_start(self):
        self.state = VendorState()
        ensure_locations(self.client)
        resp = self.client.post("/accounts", json=account_data("Vendor"), name="POST /accounts")
        self.state.vendor_id = resp.json().get("account_id")
        payload = create_shop_data(self.state.vendor_id)
        resp = self.client.post("/shops", json=payload, name="POST /shops")
        self.state.shop_id = resp.json().get("shop_id")
        self.state.shop_name = payload["name"]

    def _expect_rejected(self, payload, label):
        with self.client.put(
            f"/shops/{self.state.shop_id}",
            json=payload,
            catch_response=True,
            name=f"PUT /shops/{{id}} [{label}]",
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Expected 400 for {label}, got {resp.status_code}")

    @task
    def repeated_category(self):
        title = category_titles(1)[0]
        payload = edit_shop_data(self.state.vendor_id, self.state.shop_name, [title, title])
        self._expect_rejected(payload, "repeated category")

    @task
    def no_categories(self):
        payload = edit_shop_data(self.state.vendor_id, self.state.shop_name, [])
        self._expect_rejected(payload, "no categories")

    @task
    def unknown_location(self):
        payload = edit_shop_data(self.state.vendor_id, self.state.shop_name, category_titles(2))
        payload["location"] = "Nowhere Hall"
        self._expect_rejected(payload, "unknown location")

    @task
    def done(self):
        self.interrupt()


class VendorUser(HttpUser):
    """Vendors setting up and maintaining their menus."""

    wait_time = between(1, 3)
    tasks = {ShopSetupJourney: 4, InvalidShopEditJourney: 1}
