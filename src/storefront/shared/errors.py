"""Storefront error taxonomy.

Rule violations are Protean ``ValidationError``s so the HTTP layer maps them to
400 responses. ``InvalidTransition`` and ``ShopClosed`` narrow that for callers
that need to tell them apart. Missing records surface as Protean's
``ObjectNotFoundError``. The remaining two errors describe failures of the
collaborators behind the ports.
"""

from protean.exceptions import ValidationError


class InvalidTransition(ValidationError):
    """The order's current status does not allow the requested move."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition from {current} to {target}"]})


class ShopClosed(ValidationError):
    """The shop is closed and accepts no new orders."""

    def __init__(self, shop_name: str):
        self.shop_name = shop_name
        super().__init__({"shop": [f"{shop_name} is currently closed"]})


class DatabaseError(Exception):
    """The backing store rejected or failed an operation."""


class AuthError(Exception):
    """The authentication provider could not resolve or end a session."""
