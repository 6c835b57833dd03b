import asyncio
import inspect
from collections import deque
from typing import Awaitable, Callable, Deque, List, Optional, Tuple, Union

from splitledger.core.logging_config import get_logger
from splitledger.models.notification import Notification

logger = get_logger("services.notifier")

Subscriber = Callable[[Notification], Union[None, Awaitable[None]]]


class NotificationBus:
    """
    Fire-and-forget fan-out of ledger notifications.

    publish() only queues; a background dispatcher task delivers queued
    notifications in publish order. Each notification goes to the
    subscribers registered when it was published, in subscription order.
    Subscribers may be plain or async callables and may themselves call
    back into the ledger. A failing subscriber is logged and skipped.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []
        self._pending: Deque[Tuple[Notification, Tuple[Subscriber, ...]]] = deque()
        self._dispatcher: Optional[asyncio.Task] = None

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def publish(self, notification: Notification) -> None:
        logger.debug(
            "notification",
            extra={"notification": notification.model_dump(mode="json")},
        )
        if not self._subscribers:
            return
        self._pending.append((notification, tuple(self._subscribers)))

        loop = asyncio.get_running_loop()
        dispatcher = self._dispatcher
        if dispatcher is None or dispatcher.done() or dispatcher.get_loop() is not loop:
            self._dispatcher = loop.create_task(self._drain())

    async def join(self) -> None:
        """Wait until every queued notification has been delivered."""
        while self._dispatcher is not None and not self._dispatcher.done():
            await asyncio.shield(self._dispatcher)

    async def _drain(self) -> None:
        while self._pending:
            notification, subscribers = self._pending.popleft()
            for subscriber in subscribers:
                await _deliver(subscriber, notification)


async def _deliver(subscriber: Subscriber, notification: Notification) -> None:
    try:
        result = subscriber(notification)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception(
            "Notification subscriber failed",
            extra={
                "subscriber": getattr(subscriber, "__name__", repr(subscriber)),
                "kind": getattr(notification, "kind", None),
            },
        )
