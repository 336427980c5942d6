"""Snapshot hub factory.

Provides get_hub() / reset_hub(). The default hub loads snapshots from the
domain's repositories.
"""

from storefront.observation.hub import ObservationTopic, SnapshotHub, Subscription

_current_hub: SnapshotHub | None = None

__all__ = ["ObservationTopic", "SnapshotHub", "Subscription", "get_hub", "reset_hub", "set_hub"]


def get_hub() -> SnapshotHub:
    global _current_hub
    if _current_hub is None:
        from storefront.observation.loaders import DEFAULT_LOADERS

        _current_hub = SnapshotHub(DEFAULT_LOADERS)
    return _current_hub


def set_hub(hub: SnapshotHub) -> None:
    global _current_hub
    _current_hub = hub


def reset_hub() -> None:
    """Drop all subscriptions by discarding the hub."""
    global _current_hub
    _current_hub = None
