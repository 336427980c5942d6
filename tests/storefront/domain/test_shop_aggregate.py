"""Tests for the Shop aggregate: menu management and ordering guards."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.shared.errors import ShopClosed
from storefront.shop.events import (
    ProductAdded,
    ProductRemoved,
    ProductsReordered,
    ShopCreated,
    ShopOperatingStatusChanged,
)
from storefront.shop.shop import Shop


def _make_shop(categories=("Mains", "Drinks")):
    shop = Shop.create(owner_id="vendor-001", name="Chicken Rice Stall", description="Hainanese")
    shop.update_details("Chicken Rice Stall", "Hainanese", "loc-001", list(categories))
    shop._events.clear()
    return shop


def _names(products):
    return [product.name for product in products]


class TestShopCreation:
    def test_create_shop(self):
        shop = Shop.create(owner_id="vendor-001", name="  Noodle Bar ")
        assert shop.name == "Noodle Bar"
        assert shop.is_closed is False
        assert len(shop.categories) == 0

    def test_create_raises_event(self):
        shop = Shop.create(owner_id="vendor-001", name="Noodle Bar")
        assert isinstance(shop._events[0], ShopCreated)
        assert shop._events[0].owner_id == "vendor-001"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_name_required(self, name):
        with pytest.raises(ValidationError) as exc:
            Shop.create(owner_id="vendor-001", name=name)
        assert exc.value.messages["name"] == ["Shop name cannot be empty"]


class TestShopDetails:
    def test_categories_in_order(self):
        shop = _make_shop(("Mains", "Drinks", "Desserts"))
        assert shop.category_titles() == ["Mains", "Drinks", "Desserts"]
        assert [c.ordering_index for c in shop.ordered_categories()] == [0, 1, 2]

    def test_rename_keeps_products_in_place(self):
        shop = _make_shop()
        shop.add_product(name="Barley Water", price=1.5, category_index=1)
        shop.update_details("Chicken Rice Stall", "Hainanese", "loc-001", ["Rice", "Beverages"])
        assert shop.category_titles() == ["Rice", "Beverages"]
        assert _names(shop.category_products(1)) == ["Barley Water"]

    def test_drop_trailing_category(self):
        shop = _make_shop(("Mains", "Drinks", "Desserts"))
        shop.update_details("Chicken Rice Stall", "Hainanese", "loc-001", ["Mains", "Drinks"])
        assert shop.category_titles() == ["Mains", "Drinks"]

    def test_rename_propagates_to_products(self):
        shop = _make_shop()
        shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
        shop.update_details("Mei's Kitchen", "Hainanese", "loc-001", ["Mains", "Drinks"])
        assert shop.products[0].shop_name == "Mei's Kitchen"

    def test_product_in_unknown_category_breaks_invariant(self):
        shop = _make_shop()
        shop.add_product(name="Barley Water", price=1.5, category_index=1)
        with pytest.raises(ValidationError):
            shop.update_details("Chicken Rice Stall", "Hainanese", "loc-001", ["Mains"])


class TestOpeningHours:
    def test_close_and_reopen(self):
        shop = _make_shop()
        shop.set_closed(True)
        assert shop.is_closed is True
        assert isinstance(shop._events[-1], ShopOperatingStatusChanged)
        shop.set_closed(False)
        assert shop.is_closed is False

    def test_setting_same_state_is_a_no_op(self):
        shop = _make_shop()
        shop.set_closed(False)
        assert shop._events == []

    def test_closed_shop_refuses_orders(self):
        shop = _make_shop()
        shop.set_closed(True)
        with pytest.raises(ShopClosed) as exc:
            shop.ensure_accepting_orders()
        assert exc.value.messages["shop"] == ["Chicken Rice Stall is currently closed"]


class TestOwnership:
    def test_owner_passes(self):
        _make_shop().assert_owned_by("vendor-001")

    def test_other_account_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_shop().assert_owned_by("vendor-999")
        assert "owner_id" in exc.value.messages


class TestProducts:
    def test_add_product(self):
        shop = _make_shop()
        product = shop.add_product(name="Chicken Rice", price=4.5, category_index=0, estimated_prep_time=5)
        assert product.shop_name == "Chicken Rice Stall"
        assert product.display_order == 0
        assert product.position == 0
        assert product.estimated_prep_time == 5.0
        assert isinstance(shop._events[-1], ProductAdded)

    def test_display_order_is_per_category(self):
        shop = _make_shop()
        shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
        drink = shop.add_product(name="Barley Water", price=1.5, category_index=1)
        pork = shop.add_product(name="Roast Pork Rice", price=5.0, category_index=0)
        assert drink.display_order == 0
        assert pork.display_order == 1
        assert _names(shop.sold_products()) == ["Chicken Rice", "Barley Water", "Roast Pork Rice"]

    def test_add_to_unknown_category(self):
        with pytest.raises(ValidationError) as exc:
            _make_shop().add_product(name="Cake", price=3.0, category_index=5)
        assert "category_index" in exc.value.messages

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _make_shop().add_product(name="Cake", price=-1.0, category_index=0)

    def test_update_product_details(self):
        shop = _make_shop()
        product = shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
        shop.update_product(product.id, name="Steamed Chicken Rice", price=5.0)
        updated = shop.find_product(product.id)
        assert updated.name == "Steamed Chicken Rice"
        assert updated.price == 5.0

    def test_moving_product_to_other_category_appends_and_renumbers(self):
        shop = _make_shop()
        first = shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
        shop.add_product(name="Roast Pork Rice", price=5.0, category_index=0)
        shop.add_product(name="Barley Water", price=1.5, category_index=1)

        shop.update_product(first.id, category_index=1)

        assert _names(shop.category_products(0)) == ["Roast Pork Rice"]
        assert shop.category_products(0)[0].display_order == 0
        assert _names(shop.category_products(1)) == ["Barley Water", "Chicken Rice"]

    def test_remove_product_renumbers_category(self):
        shop = _make_shop()
        first = shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
        shop.add_product(name="Roast Pork Rice", price=5.0, category_index=0)
        shop.add_product(name="Duck Rice", price=5.5, category_index=0)

        shop.remove_product(first.id)

        assert [p.display_order for p in shop.category_products(0)] == [0, 1]
        assert _names(shop.category_products(0)) == ["Roast Pork Rice", "Duck Rice"]
        assert isinstance(shop._events[-1], ProductRemoved)

    def test_find_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _make_shop().find_product("missing")

    def test_out_of_stock_product_cannot_be_ordered(self):
        shop = _make_shop()
        product = shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
        shop.set_product_stock(product.id, True)
        with pytest.raises(ValidationError) as exc:
            shop.product_snapshot(product.id)
        assert exc.value.messages["product_id"] == ["Chicken Rice is out of stock"]

    def test_in_stock_product_snapshot(self):
        shop = _make_shop()
        product = shop.add_product(name="Chicken Rice", price=4.5, category_index=0)
        assert shop.product_snapshot(product.id).name == "Chicken Rice"


class TestMoveProducts:
    def _shop_with_mains(self, *names):
        shop = _make_shop()
        for name in names:
            shop.add_product(name=name, price=4.0, category_index=0)
        shop.add_product(name="Barley Water", price=1.5, category_index=1)
        shop._events.clear()
        return shop

    def test_move_single_product_down(self):
        shop = self._shop_with_mains("A", "B", "C", "D")
        shop.move_products(0, [0], 3)
        assert _names(shop.category_products(0)) == ["B", "C", "A", "D"]

    def test_move_to_end(self):
        shop = self._shop_with_mains("A", "B", "C", "D")
        shop.move_products(0, [1], 4)
        assert _names(shop.category_products(0)) == ["A", "C", "D", "B"]

    def test_move_several_products_up(self):
        shop = self._shop_with_mains("A", "B", "C", "D", "E")
        shop.move_products(0, [3, 4], 1)
        assert _names(shop.category_products(0)) == ["A", "D", "E", "B", "C"]

    def test_other_categories_untouched(self):
        shop = self._shop_with_mains("A", "B")
        shop.move_products(0, [1], 0)
        assert _names(shop.category_products(1)) == ["Barley Water"]
        assert shop.category_products(1)[0].display_order == 0

    def test_move_raises_reordered_event(self):
        shop = self._shop_with_mains("A", "B")
        shop.move_products(0, [1], 0)
        event = shop._events[-1]
        assert isinstance(event, ProductsReordered)
        assert event.category_index == 0

    def test_unknown_source_position(self):
        shop = self._shop_with_mains("A", "B")
        with pytest.raises(ValidationError):
            shop.move_products(0, [5], 0)

    def test_destination_out_of_range(self):
        shop = self._shop_with_mains("A", "B")
        with pytest.raises(ValidationError):
            shop.move_products(0, [0], 3)

    def test_products_at_resolves_positions(self):
        shop = self._shop_with_mains("A", "B", "C")
        assert _names(shop.products_at(0, [2, 0])) == ["A", "C"]
