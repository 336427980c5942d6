"""BDD tests for the ordered shop edit rules."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.shop.editing import check_shop_edit
from storefront.storage.port import MAX_IMAGE_SIZE

scenarios("features/shop_edit_rules.feature")


@pytest.fixture()
def edit(shop):
    """The proposed edit, starting from the shop's current details."""
    return {
        "name": shop.name,
        "description": shop.description,
        "location": "Central Library",
        "category_titles": shop.category_titles(),
        "image_size": None,
    }


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.re(r'the vendor sets the shop (?P<field>name|description|location) to "(?P<value>.*)"'))
def set_field(edit, field, value):
    edit[field] = value


@given(parsers.re(r'the vendor sets the categories to "(?P<titles>.*)"'))
def set_categories(edit, titles):
    edit["category_titles"] = [title.strip() for title in titles.split(",")] if titles else []


@given("the vendor attaches an image larger than 5MB")
def attach_large_image(edit):
    edit["image_size"] = MAX_IMAGE_SIZE + 1


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the edit is submitted")
def submit_edit(shop, edit, error):
    try:
        check_shop_edit(shop, **edit)
        shop.update_details(edit["name"], edit["description"], "loc-001", edit["category_titles"])
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the edit is accepted")
def edit_accepted(error):
    assert error["exc"] is None, f"Edit was rejected: {error['exc'].messages}"


@then(parsers.cfparse('the edit is rejected with "{reason}"'))
def edit_rejected(error, reason):
    assert error["exc"] is not None, "Expected the edit to be rejected"
    assert [reason] in error["exc"].messages.values()
