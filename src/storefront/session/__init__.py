"""Role sessions.

``start_session()`` asks the authentication port who is signed in, loads that
account once and hands back the session matching its role.
"""

from storefront.account.account import AccountRole
from storefront.auth import get_auth
from storefront.auth.port import AuthGateway
from storefront.gateway import get_gateway
from storefront.gateway.port import PersistenceGateway
from storefront.session.customer import CustomerSession
from storefront.session.vendor import VendorSession
from storefront.shared.errors import AuthError

__all__ = ["CustomerSession", "VendorSession", "start_session"]


def start_session(auth: AuthGateway | None = None, gateway: PersistenceGateway | None = None):
    auth = auth or get_auth()
    gateway = gateway or get_gateway()

    result = auth.get_current_user()
    if not result.success:
        raise result.error
    if result.account_id is None:
        raise AuthError("Nobody is signed in")

    account = gateway.get_account(result.account_id).unwrap()
    if account.role == AccountRole.VENDOR.value:
        return VendorSession(account, gateway, auth)
    return CustomerSession(account, gateway, auth)
