"""Mixed storefront workload scenario.

Combines vendor and pickup journeys with weights that model a lunchtime rush:
most traffic is customers ordering, with vendors tweaking menus on the side.
This is the recommended scenario for a load baseline.
"""

from locust import HttpUser, between

from loadtests.scenarios.pickup import BrowsingJourney, CancellationJourney, PickupLifecycleJourney
from loadtests.scenarios.vendor import InvalidShopEditJourney, ShopSetupJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Ordering (70%):
    - Pickup lifecycle: the happy path, most common
    - Browsing and favourites
    - Cancellations: the unhappy path

    Menu management (30%):
    - Shop setup and upkeep
    - Rejected edits
    """

    wait_time = between(0.5, 2)
    tasks = {
        PickupLifecycleJourney: 40,
        BrowsingJourney: 20,
        CancellationJourney: 10,
        ShopSetupJourney: 25,
        InvalidShopEditJourney: 5,
    }
