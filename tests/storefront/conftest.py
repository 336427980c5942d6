import json
import os

import pytest


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain
    from storefront.auth import reset_auth
    from storefront.gateway import reset_gateway
    from storefront.observation import reset_hub
    from storefront.storage import reset_storage

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()

    reset_hub()
    reset_storage()
    reset_auth()
    reset_gateway()
    ctx.pop()


# ---------------------------------------------------------------------------
# Common storefront state
# ---------------------------------------------------------------------------
def _register(name, email, role):
    from protean import current_domain
    from storefront.account.registration import RegisterAccount

    return current_domain.process(RegisterAccount(name=name, email=email, role=role), asynchronous=False)


@pytest.fixture()
def vendor_id():
    return _register("Mei Ling", "mei@example.com", "Vendor")


@pytest.fixture()
def customer_id():
    return _register("Arjun", "arjun@example.com", "Customer")


@pytest.fixture()
def location_id():
    from protean import current_domain
    from storefront.location.location import CreateLocation

    return current_domain.process(CreateLocation(name="Central Library"), asynchronous=False)


@pytest.fixture()
def shop_id(vendor_id, location_id):
    """An open shop with two categories: Mains (0) and Drinks (1)."""
    from protean import current_domain
    from storefront.shop.creation import CreateShop
    from storefront.shop.editing import EditShop

    shop_id = current_domain.process(
        CreateShop(owner_id=vendor_id, name="Chicken Rice Stall", description="Hainanese style"),
        asynchronous=False,
    )
    current_domain.process(
        EditShop(
            shop_id=shop_id,
            owner_id=vendor_id,
            name="Chicken Rice Stall",
            description="Hainanese style",
            location="Central Library",
            category_titles=json.dumps(["Mains", "Drinks"]),
        ),
        asynchronous=False,
    )
    return shop_id


@pytest.fixture()
def menu(shop_id, vendor_id):
    """Product ids by name: two mains and one drink."""
    from protean import current_domain
    from storefront.shop.products import AddProduct

    items = [
        ("Chicken Rice", 4.5, 0),
        ("Roast Pork Rice", 5.0, 0),
        ("Barley Water", 1.5, 1),
    ]
    return {
        name: current_domain.process(
            AddProduct(shop_id=shop_id, owner_id=vendor_id, name=name, price=price, category_index=category_index),
            asynchronous=False,
        )
        for name, price, category_index in items
    }
