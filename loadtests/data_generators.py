"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
(unique emails, non-blank shop details, distinct category titles, quantities
between 1 and 1000) and match the field names expected by the API's Pydantic
request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

PICKUP_LOCATIONS = [
    "Central Library",
    "Engineering Block",
    "Student Union",
    "Science Park",
    "Arts Faculty",
]

CATEGORY_POOL = ["Mains", "Drinks", "Desserts", "Snacks", "Sides", "Breakfast", "Specials"]

OPTION_POOL = [
    ("Extra rice", 0.5),
    ("Add egg", 1.0),
    ("Less sugar", 0.0),
    ("Large", 0.8),
    ("No chilli", 0.0),
]


# ---------- Accounts ----------


def unique_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def account_data(role: str) -> dict:
    """Generate RegisterAccountRequest payload for a Vendor or Customer."""
    return {"name": fake.name()[:100], "email": unique_email(), "role": role}


# ---------- Shops ----------


def location_name() -> str:
    return random.choice(PICKUP_LOCATIONS)


def shop_name() -> str:
    return f"{fake.last_name()}'s {random.choice(['Kitchen', 'Stall', 'Cafe', 'Bar', 'Corner'])}"[:100]


def category_titles(count: int | None = None) -> list[str]:
    """Distinct, non-blank titles in a random order."""
    count = count or random.randint(1, 4)
    return random.sample(CATEGORY_POOL, count)


def create_shop_data(owner_id: str) -> dict:
    return {"owner_id": owner_id, "name": shop_name(), "description": fake.sentence(nb_words=8)}


def edit_shop_data(owner_id: str, name: str, categories: list[str]) -> dict:
    """Generate EditShopRequest payload. Location must already be registered."""
    return {
        "owner_id": owner_id,
        "name": name,
        "description": fake.sentence(nb_words=10),
        "location": location_name(),
        "categories": categories,
    }


def product_data(owner_id: str, category_count: int) -> dict:
    """Generate CreateProductRequest payload for one of the shop's categories."""
    return {
        "owner_id": owner_id,
        "name": f"{fake.color_name()} {fake.word().capitalize()}"[:150],
        "description": fake.sentence(nb_words=6),
        "price": round(random.uniform(1.0, 15.0), 2),
        "estimated_prep_time": float(random.choice([0, 2, 5, 8, 12])),
        "category_index": random.randrange(category_count),
    }


# ---------- Orders ----------


def option_choices() -> list[dict]:
    picks = random.sample(OPTION_POOL, random.randint(0, 2))
    return [{"description": description, "cost": cost} for description, cost in picks]


def order_data(customer_id: str, shop_id: str, product_id: str) -> dict:
    """Generate PlaceOrderRequest payload with an in-range quantity."""
    return {
        "customer_id": customer_id,
        "shop_id": shop_id,
        "product_id": product_id,
        "quantity": random.choices([1, 2, 3, 5], weights=[60, 25, 10, 5])[0],
        "option_choices": option_choices(),
    }


def cancellation_note() -> str | None:
    return random.choice([None, "Ordered by mistake", "Running late", fake.sentence(nb_words=5)])
