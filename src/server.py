"""Protean Engine runner for the storefront domain.

Only needed when events are processed asynchronously (PROTEAN_ENV=production):
the Engine's outbox processor publishes storefront events and its stream
subscriptions feed the order summary projector and the snapshot publishers.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from storefront.domain import storefront

    storefront.init()
    await Engine(storefront).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
