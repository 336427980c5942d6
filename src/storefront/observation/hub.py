"""Push-style observation of storefront state.

Clients subscribe to a topic and key (a vendor's shops, a customer's orders,
a shop's order board). The hub delivers a complete snapshot right away and
again every time ``publish`` is called for that topic and key. Each delivery
replaces the previous one; nothing is diffed.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.shared.errors import DatabaseError
from storefront.shared.result import GatewayResult, failed, ok
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Errors turned into failed results instead of escaping to the publisher
DELIVERABLE_ERRORS = (ValidationError, ObjectNotFoundError, DatabaseError)


class ObservationTopic(Enum):
    SHOPS_BY_OWNER = "shops_by_owner"
    ALL_SHOPS = "all_shops"
    ORDERS_BY_CUSTOMER = "orders_by_customer"
    ORDERS_BY_SHOP = "orders_by_shop"


@dataclass(eq=False)
class Subscription:
    topic: ObservationTopic
    key: str | None
    callback: Callable[[GatewayResult], None]
    hub: "SnapshotHub" = field(repr=False)
    active: bool = True

    def cancel(self) -> None:
        """Stop deliveries. Cancelling twice is harmless."""
        self.hub.unsubscribe(self)


class SnapshotHub:
    def __init__(self, loaders: dict[ObservationTopic, Callable[[Any], Any]] | None = None) -> None:
        self.loaders: dict[ObservationTopic, Callable[[Any], Any]] = dict(loaders or {})
        self.subscriptions: list[Subscription] = []

    def register_loader(self, topic: ObservationTopic, loader: Callable[[Any], Any]) -> None:
        self.loaders[topic] = loader

    def subscribe(self, topic: ObservationTopic, key, callback: Callable[[GatewayResult], None]) -> Subscription:
        if topic not in self.loaders:
            raise KeyError(f"No loader registered for {topic.value}")

        subscription = Subscription(topic=topic, key=_normalise(key), callback=callback, hub=self)
        self.subscriptions.append(subscription)
        self._deliver(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.active = False
        if subscription in self.subscriptions:
            self.subscriptions.remove(subscription)

    def publish(self, topic: ObservationTopic, key=None) -> int:
        """Push a fresh snapshot to every subscriber of ``topic``/``key``.

        Returns the number of deliveries made.
        """
        key = _normalise(key)
        targets = [s for s in self.subscriptions if s.topic == topic and s.key == key]
        for subscription in targets:
            self._deliver(subscription)
        return len(targets)

    def _deliver(self, subscription: Subscription) -> None:
        if not subscription.active:
            return

        try:
            result = ok(self.loaders[subscription.topic](subscription.key))
        except DELIVERABLE_ERRORS as exc:
            logger.warning(
                "snapshot_load_failed",
                topic=subscription.topic.value,
                key=subscription.key,
                error=str(exc),
            )
            result = failed(exc)

        subscription.callback(result)


def _normalise(key):
    return None if key is None else str(key)
