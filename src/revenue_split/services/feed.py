"""Change feed for the payout ledger.

Subscribers receive the full current record set of the ledger after every
change, not a delta. The feed provides:
- Synchronous and asynchronous handlers
- Error isolation (handler failures don't break other handlers)
- Unsubscribe callables returned from `subscribe`
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union

logger = logging.getLogger(__name__)

SnapshotHandler = Callable[[Sequence[Any]], Union[None, Awaitable[None]]]


@dataclass
class Subscription:
    """Registration of a snapshot handler."""

    handler: SnapshotHandler
    is_async: bool


class LedgerFeed:
    """Push feed of ledger snapshots.

    Usage:
        feed = LedgerFeed()
        unsubscribe = feed.subscribe(totals.on_snapshot)

        await feed.publish(records)   # every handler gets `records`

        unsubscribe()
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    @property
    def has_subscribers(self) -> bool:
        return bool(self._subscriptions)

    def subscribe(self, handler: SnapshotHandler) -> Callable[[], None]:
        """Register a handler; returns a callable that removes it."""
        registration = Subscription(
            handler=handler,
            is_async=asyncio.iscoroutinefunction(handler),
        )
        self._subscriptions.append(registration)

        def unsubscribe() -> None:
            self._subscriptions = [
                sub for sub in self._subscriptions if sub is not registration
            ]

        return unsubscribe

    async def publish(self, records: Sequence[Any]) -> list[Exception]:
        """Deliver `records` to every subscriber.

        Returns list of any exceptions raised by handlers.
        Handlers are isolated - failures don't stop other handlers.
        """
        errors: list[Exception] = []
        for sub in list(self._subscriptions):
            try:
                outcome = sub.handler(records)
                if sub.is_async or asyncio.iscoroutine(outcome):
                    await outcome  # type: ignore[misc]
            except Exception as e:
                logger.exception("Ledger feed handler %s failed", sub.handler)
                errors.append(e)
        return errors
