"""Persistence gateway factory.

Provides get_gateway() / set_gateway() / reset_gateway(). Defaults to the
domain-backed adapter.
"""

from storefront.gateway.domain_adapter import DomainGateway
from storefront.gateway.port import PersistenceGateway

_current_gateway: PersistenceGateway | None = None


def get_gateway() -> PersistenceGateway:
    """Return the current persistence gateway. Defaults to DomainGateway."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = DomainGateway()
    return _current_gateway


def set_gateway(gateway: PersistenceGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
