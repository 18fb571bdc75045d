"""Order change feed — in-process fan-out of order status changes to live viewers.

Each open tracking page holds a ``Subscription`` for one order. Subscriptions
are bound to the event loop that created them; ``publish`` may be called from
any thread and hands the change to each subscriber's loop.

Delivery is best-effort per live subscriber: a viewer that connects after a
change only sees later changes, so clients read the current order state once
when they subscribe.
"""

import asyncio
import threading
from dataclasses import dataclass
from datetime import datetime

import structlog

logger = structlog.get_logger(__name__)

_CLOSED = object()


@dataclass(frozen=True)
class OrderChange:
    order_id: str
    status: str
    updated_at: datetime | None = None

    def as_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "status": self.status,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class Subscription:
    """Async iterator over the changes to one order.

    Use as ``async with feed.subscribe(order_id) as changes: async for change in changes``
    or call ``close()`` explicitly.
    """

    def __init__(self, feed: "OrderChangeFeed", order_id: str, loop: asyncio.AbstractEventLoop):
        self.order_id = order_id
        self._feed = feed
        self._loop = loop
        self._queue: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def _deliver(self, item) -> None:
        # Runs on the subscriber's loop
        self._queue.put_nowait(item)

    def push(self, item) -> None:
        self._loop.call_soon_threadsafe(self._deliver, item)

    async def next(self, timeout: float | None = None) -> OrderChange | None:
        """Wait for the next change. Returns None on timeout, raises StopAsyncIteration once closed."""
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        try:
            item = await asyncio.wait_for(self._queue.get(), timeout)
        except TimeoutError:
            return None
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    def __aiter__(self):
        return self

    async def __anext__(self) -> OrderChange:
        change = None
        while change is None:
            change = await self.next()
        return change

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._feed._unsubscribe(self)
        if not self._loop.is_closed():
            self.push(_CLOSED)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.close()


class OrderChangeFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: dict[str, set[Subscription]] = {}

    def subscribe(self, order_id) -> Subscription:
        """Open a subscription for ``order_id``. Must be called from a running event loop."""
        subscription = Subscription(self, str(order_id), asyncio.get_running_loop())
        with self._lock:
            self._subscribers.setdefault(subscription.order_id, set()).add(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscription.order_id)
            if subscribers is None:
                return
            subscribers.discard(subscription)
            if not subscribers:
                del self._subscribers[subscription.order_id]

    def subscriber_count(self, order_id) -> int:
        with self._lock:
            return len(self._subscribers.get(str(order_id), ()))

    def publish(self, change: OrderChange) -> int:
        """Hand ``change`` to every live subscriber of its order. Returns how many received it."""
        with self._lock:
            subscribers = list(self._subscribers.get(change.order_id, ()))

        delivered = 0
        for subscription in subscribers:
            try:
                subscription.push(change)
            except RuntimeError:
                # The subscriber's loop has shut down
                logger.debug("Dropping subscription on closed loop", order_id=change.order_id)
                self._unsubscribe(subscription)
                continue
            delivered += 1
        return delivered


_feed: OrderChangeFeed | None = None


def get_feed() -> OrderChangeFeed:
    global _feed
    if _feed is None:
        _feed = OrderChangeFeed()
    return _feed


def reset_feed() -> None:
    """Drop the feed singleton and its subscribers (useful for testing)."""
    global _feed
    _feed = None
