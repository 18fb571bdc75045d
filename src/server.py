"""Protean Engine runner for the FriendHome domain.

Starts Engine workers that process events asynchronously in production:
- OutboxProcessor: polls outbox table, publishes events to Redis Streams
- StreamSubscriptions: reads Redis Streams, invokes projectors and event handlers
  (order summary projector, live tracking publisher, push status alerts)

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from friendhome.domain import friendhome

    friendhome.init()
    await Engine(friendhome).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
