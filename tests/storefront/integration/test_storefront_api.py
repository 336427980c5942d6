"""Integration tests for the storefront API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from storefront.api import account_router, location_router, order_router, shop_router
from storefront.storage.port import MAX_IMAGE_SIZE


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (location_router, account_router, shop_router, order_router):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


def _register(client, name, email, role):
    response = client.post("/accounts", json={"name": name, "email": email, "role": role})
    assert response.status_code == 201
    return response.json()["account_id"]


@pytest.fixture()
def api_vendor(client):
    return _register(client, "Mei Ling", "mei@example.com", "Vendor")


@pytest.fixture()
def api_customer(client):
    return _register(client, "Arjun", "arjun@example.com", "Customer")


@pytest.fixture()
def api_shop(client, api_vendor):
    client.post("/locations", json={"name": "Central Library"})
    response = client.post("/shops", json={"owner_id": api_vendor, "name": "Chicken Rice Stall"})
    assert response.status_code == 201
    shop_id = response.json()["shop_id"]
    response = client.put(
        f"/shops/{shop_id}",
        json={
            "owner_id": api_vendor,
            "name": "Chicken Rice Stall",
            "description": "Hainanese style",
            "location": "Central Library",
            "categories": ["Mains", "Drinks"],
        },
    )
    assert response.status_code == 200
    return shop_id


def _add_product(client, shop_id, owner_id, name, price, category_index):
    response = client.post(
        f"/shops/{shop_id}/products",
        json={"owner_id": owner_id, "name": name, "price": price, "category_index": category_index},
    )
    assert response.status_code == 201
    return response.json()["product_id"]


@pytest.fixture()
def api_product(client, api_shop, api_vendor):
    return _add_product(client, api_shop, api_vendor, "Chicken Rice", 4.5, 0)


def _place(client, customer_id, shop_id, product_id, quantity=1, **extra):
    return client.post(
        "/orders",
        json={"customer_id": customer_id, "shop_id": shop_id, "product_id": product_id, "quantity": quantity, **extra},
    )


class TestLocationAndAccountAPI:
    def test_list_locations(self, client):
        client.post("/locations", json={"name": "Science Park"})
        client.post("/locations", json={"name": "Arts Faculty"})
        names = [location["name"] for location in client.get("/locations").json()]
        assert names == ["Arts Faculty", "Science Park"]

    def test_duplicate_location_is_400(self, client):
        client.post("/locations", json={"name": "Science Park"})
        assert client.post("/locations", json={"name": "Science Park"}).status_code == 400

    def test_get_account(self, client, api_customer):
        body = client.get(f"/accounts/{api_customer}").json()
        assert body["role"] == "Customer"
        assert body["favourites"] == []

    def test_unknown_account_is_404(self, client):
        assert client.get("/accounts/nobody").status_code == 404

    def test_toggle_favourite(self, client, api_customer, api_product):
        response = client.put(f"/accounts/{api_customer}/favourites/{api_product}")
        assert response.json() == {"product_id": api_product, "is_favourite": True}
        assert client.get(f"/accounts/{api_customer}").json()["favourites"] == [api_product]

    def test_unknown_product_favourite_is_404(self, client, api_customer):
        assert client.put(f"/accounts/{api_customer}/favourites/ghost-product").status_code == 404


class TestShopAPI:
    def test_catalog(self, client, api_shop, api_vendor):
        _add_product(client, api_shop, api_vendor, "Chicken Rice", 4.5, 0)
        _add_product(client, api_shop, api_vendor, "Barley Water", 1.5, 1)

        body = client.get(f"/shops/{api_shop}/catalog").json()

        assert body["location_name"] == "Central Library"
        assert [section["title"] for section in body["sections"]] == ["Mains", "Drinks"]
        assert body["sections"][1]["products"][0]["name"] == "Barley Water"

    def test_repeated_categories_rejected(self, client, api_shop, api_vendor):
        response = client.put(
            f"/shops/{api_shop}",
            json={
                "owner_id": api_vendor,
                "name": "Chicken Rice Stall",
                "description": "Hainanese style",
                "location": "Central Library",
                "categories": ["Drinks", "Drinks"],
            },
        )
        assert response.status_code == 400
        titles = [s["title"] for s in client.get(f"/shops/{api_shop}/catalog").json()["sections"]]
        assert titles == ["Mains", "Drinks"]

    def test_unknown_shop_is_404(self, client):
        assert client.get("/shops/missing/catalog").status_code == 404

    def test_close_and_open(self, client, api_shop, api_vendor):
        client.put(f"/shops/{api_shop}/close", json={"owner_id": api_vendor})
        assert client.get(f"/shops/{api_shop}/catalog").json()["is_closed"] is True
        client.put(f"/shops/{api_shop}/open", json={"owner_id": api_vendor})
        assert client.get(f"/shops/{api_shop}/catalog").json()["is_closed"] is False

    def test_shop_image_round_trip(self, client, api_shop, api_vendor):
        response = client.put(f"/shops/{api_shop}/image", params={"owner_id": api_vendor}, content=b"\x89PNG")
        assert response.status_code == 200
        image = client.get(f"/shops/{api_shop}/image")
        assert image.status_code == 200
        assert image.content == b"\x89PNG"

    def test_oversized_image_is_400(self, client, api_shop, api_vendor):
        response = client.put(
            f"/shops/{api_shop}/image", params={"owner_id": api_vendor}, content=b"x" * (MAX_IMAGE_SIZE + 1)
        )
        assert response.status_code == 400

    def test_missing_image_is_404(self, client, api_shop):
        assert client.get(f"/shops/{api_shop}/image").status_code == 404

    def test_move_and_remove_products(self, client, api_shop, api_vendor):
        first = _add_product(client, api_shop, api_vendor, "Chicken Rice", 4.5, 0)
        _add_product(client, api_shop, api_vendor, "Roast Pork Rice", 5.0, 0)

        response = client.put(
            f"/shops/{api_shop}/categories/0/order",
            json={"owner_id": api_vendor, "source_positions": [1], "destination": 0},
        )
        assert response.status_code == 200
        client.delete(f"/shops/{api_shop}/products/{first}", params={"owner_id": api_vendor})

        mains = client.get(f"/shops/{api_shop}/catalog").json()["sections"][0]["products"]
        assert [product["name"] for product in mains] == ["Roast Pork Rice"]

    def test_remove_several_products(self, client, api_shop, api_vendor):
        for name in ("Chicken Rice", "Roast Pork Rice", "Duck Rice"):
            _add_product(client, api_shop, api_vendor, name, 4.5, 0)

        response = client.post(
            f"/shops/{api_shop}/categories/0/removals",
            json={"owner_id": api_vendor, "positions": [0, 2]},
        )
        assert response.status_code == 200

        mains = client.get(f"/shops/{api_shop}/catalog").json()["sections"][0]["products"]
        assert [product["name"] for product in mains] == ["Roast Pork Rice"]

    def test_customer_cannot_open_shop(self, client, api_customer):
        response = client.post("/shops", json={"owner_id": api_customer, "name": "Noodle Bar"})
        assert response.status_code == 400

    def test_out_of_stock(self, client, api_shop, api_vendor, api_product, api_customer):
        client.put(
            f"/shops/{api_shop}/products/{api_product}/stock",
            json={"owner_id": api_vendor, "is_out_of_stock": True},
        )
        assert _place(client, api_customer, api_shop, api_product).status_code == 400


class TestOrderAPI:
    def test_place_and_fetch_wire_document(self, client, api_customer, api_shop, api_product):
        response = _place(
            client, api_customer, api_shop, api_product, quantity=2, option_choices=[{"description": "Egg", "cost": 1}]
        )
        assert response.status_code == 201
        order_id = response.json()["order_id"]

        wire = client.get(f"/orders/{order_id}").json()
        assert wire["collectionNo"] == 1
        assert wire["shopName"] == "Chicken Rice Stall"
        assert wire["orderProductSchemas"]["0"]["optionChoices"] == [{"description": "Egg", "cost": 1.0}]

    def test_quantity_out_of_bounds_is_400(self, client, api_customer, api_shop, api_product):
        assert _place(client, api_customer, api_shop, api_product, quantity=1001).status_code == 400

    def test_vendor_cannot_place_order(self, client, api_vendor, api_shop, api_product):
        assert _place(client, api_vendor, api_shop, api_product).status_code == 400

    def test_unknown_customer_is_404(self, client, api_shop, api_product):
        assert _place(client, "no-such-account", api_shop, api_product).status_code == 404

    def test_closed_shop_is_400(self, client, api_customer, api_vendor, api_shop, api_product):
        client.put(f"/shops/{api_shop}/close", json={"owner_id": api_vendor})
        assert _place(client, api_customer, api_shop, api_product).status_code == 400

    def test_customer_orders_partitioned(self, client, api_customer, api_vendor, api_shop, api_product):
        first = _place(client, api_customer, api_shop, api_product).json()["order_id"]
        second = _place(client, api_customer, api_shop, api_product).json()["order_id"]
        client.put(f"/orders/{first}/collect", json={"vendor_id": api_vendor})

        body = client.get("/orders", params={"customer_id": api_customer}).json()

        assert [order["id"] for order in body["current"]] == [second]
        assert [order["id"] for order in body["history"]] == [first]

    def test_cancel_and_cancel_again(self, client, api_customer, api_shop, api_product):
        order_id = _place(client, api_customer, api_shop, api_product).json()["order_id"]
        assert client.put(f"/orders/{order_id}/cancel", json={"customer_id": api_customer}).status_code == 200
        assert client.put(f"/orders/{order_id}/cancel", json={"customer_id": api_customer}).status_code == 400
        assert client.get(f"/orders/{order_id}").json()["status"] == "Cancelled"

    def test_order_board(self, client, api_customer, api_vendor, api_shop, api_product):
        order_id = _place(client, api_customer, api_shop, api_product).json()["order_id"]
        client.put(f"/orders/{order_id}/ready", json={"vendor_id": api_vendor})

        board = client.get(f"/shops/{api_shop}/orders").json()

        assert [summary["status"] for summary in board["current"]] == ["Ready"]
        assert board["current"][0]["total"] == pytest.approx(4.5)
        assert board["history"] == []

    def test_unknown_action_is_404(self, client, api_customer, api_vendor, api_shop, api_product):
        order_id = _place(client, api_customer, api_shop, api_product).json()["order_id"]
        assert client.put(f"/orders/{order_id}/refund", json={"vendor_id": api_vendor}).status_code == 404
