"""Application tests for vendor and customer sessions."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.auth.fake_adapter import FakeAuth
from storefront.gateway.domain_adapter import DomainGateway
from storefront.gateway.port import ProductData
from storefront.order.order import OrderStatus
from storefront.session import CustomerSession, VendorSession, start_session
from storefront.shared.errors import AuthError, InvalidTransition
from storefront.storage.memory_adapter import InMemoryImageStorage


@pytest.fixture()
def auth():
    return FakeAuth()


@pytest.fixture()
def gateway():
    return DomainGateway(storage=InMemoryImageStorage())


def _signed_in(auth, gateway, account_id):
    auth.sign_in(account_id)
    return start_session(auth=auth, gateway=gateway)


class TestStartSession:
    def test_vendor_gets_vendor_session(self, auth, gateway, vendor_id):
        session = _signed_in(auth, gateway, vendor_id)
        assert isinstance(session, VendorSession)
        assert session.account_id == vendor_id

    def test_customer_gets_customer_session(self, auth, gateway, customer_id):
        assert isinstance(_signed_in(auth, gateway, customer_id), CustomerSession)

    def test_nobody_signed_in(self, auth, gateway):
        with pytest.raises(AuthError):
            start_session(auth=auth, gateway=gateway)

    def test_auth_provider_failure(self, auth, gateway, vendor_id):
        auth.sign_in(vendor_id)
        auth.configure(should_succeed=False, failure_reason="Token expired")
        with pytest.raises(AuthError, match="Token expired"):
            start_session(auth=auth, gateway=gateway)

    def test_unknown_account(self, auth, gateway):
        auth.sign_in("ghost")
        with pytest.raises(ObjectNotFoundError):
            start_session(auth=auth, gateway=gateway)


class TestVendorSession:
    def test_no_shop_yet(self, auth, gateway, vendor_id):
        session = _signed_in(auth, gateway, vendor_id)
        assert session.current_shop is None
        assert session.shop_name == "My Shop"
        with pytest.raises(ObjectNotFoundError):
            session.set_closed(True)
        with pytest.raises(ObjectNotFoundError):
            session.catalog()

    def test_current_shop_follows_snapshots(self, auth, gateway, vendor_id, location_id):
        session = _signed_in(auth, gateway, vendor_id)

        session.create_shop("Noodle Bar", "Soups")
        assert session.shop_name == "Noodle Bar"

        session.edit_shop("Noodle Bar", "Soups", "Central Library", ["Noodles", "Drinks"])
        session.create_product(ProductData(name="Laksa", price=6.0, category_index=0))
        session.create_product(ProductData(name="Mee Pok", price=5.0, category_index=0))

        catalog = session.catalog()
        assert [section.title for section in catalog.sections] == ["Noodles", "Drinks"]
        assert [card.name for card in catalog.section("Noodles").products] == ["Laksa", "Mee Pok"]

    def test_menu_intents(self, auth, gateway, vendor_id, shop_id, menu):
        session = _signed_in(auth, gateway, vendor_id)

        session.move_products(0, [1], 0)
        session.set_product_stock(menu["Barley Water"], True)
        session.delete_products(0, [0])

        catalog = session.catalog()
        assert [card.name for card in catalog.section("Mains").products] == ["Chicken Rice"]
        assert catalog.section("Drinks").products[0].is_out_of_stock is True

    def test_failed_intent_raises_and_keeps_snapshot(self, auth, gateway, vendor_id, shop_id):
        session = _signed_in(auth, gateway, vendor_id)
        with pytest.raises(ValidationError):
            session.edit_shop("Chicken Rice Stall", "Hainanese", "Central Library", ["Drinks", "Drinks"])
        assert session.current_shop.category_titles() == ["Mains", "Drinks"]

    def test_delete_products_failure_keeps_menu(self, auth, gateway, vendor_id, shop_id, menu):
        session = _signed_in(auth, gateway, vendor_id)
        with pytest.raises(ValidationError):
            session.delete_products(0, [0, 7])
        assert [card.name for card in session.catalog().section("Mains").products] == [
            "Chicken Rice",
            "Roast Pork Rice",
        ]

    def test_replacing_order_board_drops_old_subscription(self, auth, gateway, vendor_id, shop_id):
        session = _signed_in(auth, gateway, vendor_id)
        old_board = session._board
        count = len(session._subscriptions)

        session._watch_board(shop_id)

        assert old_board.active is False
        assert old_board not in session._subscriptions
        assert len(session._subscriptions) == count

    def test_order_board_updates(self, auth, gateway, vendor_id, customer_id, shop_id, menu):
        session = _signed_in(auth, gateway, vendor_id)
        order_id = gateway.create_order(customer_id, shop_id, menu["Chicken Rice"], 1).unwrap()

        assert [view.order_id for view in session.order_views.current] == [order_id]

        session.advance_order(order_id, OrderStatus.READY)
        assert session.order_views.find(order_id).status == OrderStatus.READY.value

        session.advance_order(order_id, OrderStatus.COLLECTED)
        assert session.order_views.current == ()
        assert [view.order_id for view in session.order_views.history] == [order_id]


class TestCustomerSession:
    def test_browse_and_order(self, auth, gateway, customer_id, shop_id, menu):
        session = _signed_in(auth, gateway, customer_id)
        assert [str(shop.id) for shop in session.shops] == [shop_id]

        order_id = session.place_order(shop_id, menu["Roast Pork Rice"], 2)

        assert [view.order_id for view in session.current_orders] == [order_id]
        assert session.current_orders[0].collection_no == 1

    def test_cancel_moves_order_to_history(self, auth, gateway, customer_id, shop_id, menu):
        session = _signed_in(auth, gateway, customer_id)
        order_id = session.place_order(shop_id, menu["Roast Pork Rice"], 1)

        session.cancel_order(order_id)

        assert session.current_orders == ()
        assert session.order_history[0].status == OrderStatus.CANCELLED.value

    def test_cancel_terminal_order_raises(self, auth, gateway, customer_id, vendor_id, shop_id, menu):
        session = _signed_in(auth, gateway, customer_id)
        order_id = session.place_order(shop_id, menu["Roast Pork Rice"], 1)
        gateway.advance_order(order_id, vendor_id, OrderStatus.COLLECTED).unwrap()

        with pytest.raises(InvalidTransition):
            session.cancel_order(order_id)
        assert session.order_history[0].status == OrderStatus.COLLECTED.value

    def test_catalog_reflects_vendor_changes(self, auth, gateway, customer_id, vendor_id, shop_id, menu):
        session = _signed_in(auth, gateway, customer_id)
        gateway.set_shop_closed(shop_id, vendor_id, True).unwrap()
        assert session.catalog(shop_id).is_closed is True

    def test_unknown_shop(self, auth, gateway, customer_id):
        with pytest.raises(ObjectNotFoundError):
            _signed_in(auth, gateway, customer_id).shop("missing")

    def test_favourites(self, auth, gateway, customer_id, shop_id, menu):
        session = _signed_in(auth, gateway, customer_id)

        assert session.toggle_favourite(menu["Barley Water"]) is True
        assert session.is_favourite(menu["Barley Water"])
        assert [product.name for product in session.favourite_products()] == ["Barley Water"]

        assert session.toggle_favourite(menu["Barley Water"]) is False
        assert session.favourites == frozenset()

    def test_toggle_follows_stored_favourites(self, auth, gateway, customer_id, menu):
        first = _signed_in(auth, gateway, customer_id)
        stale = _signed_in(auth, gateway, customer_id)
        first.toggle_favourite(menu["Chicken Rice"])

        assert stale.toggle_favourite(menu["Chicken Rice"]) is False
        assert stale.favourites == frozenset()

    def test_favourites_survive_a_new_session(self, auth, gateway, customer_id, menu):
        _signed_in(auth, gateway, customer_id).toggle_favourite(menu["Chicken Rice"])
        assert _signed_in(auth, gateway, customer_id).is_favourite(menu["Chicken Rice"])


class TestSignOut:
    def test_sign_out_stops_updates(self, auth, gateway, customer_id, shop_id, menu):
        session = _signed_in(auth, gateway, customer_id)
        session.sign_out()

        gateway.create_order(customer_id, shop_id, menu["Chicken Rice"], 1).unwrap()

        assert session.current_orders == ()
        assert auth.current_account_id is None

    def test_sign_out_failure(self, auth, gateway, customer_id):
        session = _signed_in(auth, gateway, customer_id)
        auth.configure(should_succeed=False)
        with pytest.raises(AuthError):
            session.sign_out()
