"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across
users. State tracks ids returned by creation endpoints so follow-up requests
can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class VendorState:
    """Tracks a simulated vendor running one shop."""

    vendor_id: str | None = None
    shop_id: str | None = None
    shop_name: str | None = None
    categories: list[str] = field(default_factory=list)
    product_ids: list[str] = field(default_factory=list)
    is_closed: bool = False


@dataclass
class CustomerState:
    """Tracks a simulated customer browsing and ordering."""

    customer_id: str | None = None
    shop_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
    favourite_ids: set[str] = field(default_factory=set)


@dataclass
class PickupState:
    """Tracks one order from placement to collection, across both roles."""

    vendor_id: str | None = None
    customer_id: str | None = None
    shop_id: str | None = None
    product_id: str | None = None
    order_id: str | None = None
    current_status: str = "Accepted"
