"""Authentication gateway factory.

Provides get_auth() / set_auth() / reset_auth() to swap implementations.
Defaults to the in-process FakeAuth.
"""

from storefront.auth.fake_adapter import FakeAuth
from storefront.auth.port import AuthGateway

_current_auth: AuthGateway | None = None


def get_auth() -> AuthGateway:
    """Return the active authentication gateway."""
    global _current_auth
    if _current_auth is None:
        _current_auth = FakeAuth()
    return _current_auth


def set_auth(auth: AuthGateway) -> None:
    global _current_auth
    _current_auth = auth


def reset_auth() -> None:
    global _current_auth
    _current_auth = None
