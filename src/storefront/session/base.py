"""Behaviour shared by vendor and customer sessions."""

from storefront.auth.port import AuthGateway
from storefront.gateway.port import GatewayResult, PersistenceGateway
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class Session:
    """A signed-in account talking to the storefront through the gateway.

    Sessions hold the latest snapshot of everything they observe. Failed
    deliveries keep the previous snapshot and are exposed as ``last_error``.
    """

    def __init__(self, account, gateway: PersistenceGateway, auth: AuthGateway) -> None:
        self.account = account
        self.gateway = gateway
        self.auth = auth
        self.last_error: Exception | None = None
        self._subscriptions = []

    @property
    def account_id(self) -> str:
        return str(self.account.id)

    def _watch(self, subscribe, callback) -> None:
        self._subscriptions.append(subscribe(callback))

    def _accept(self, result: GatewayResult, what: str):
        """Return the delivered value, or ``None`` after recording a failed delivery."""
        if result.success:
            self.last_error = None
            return result.value

        self.last_error = result.error
        logger.warning("snapshot_delivery_failed", account_id=self.account_id, snapshot=what, error=str(result.error))
        return None

    def close(self) -> None:
        """Stop observing. The session keeps its last snapshots."""
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []

    def sign_out(self) -> None:
        result = self.auth.sign_out_user()
        if not result.success:
            raise result.error
        self.close()
        logger.info("signed_out", account_id=self.account_id)
