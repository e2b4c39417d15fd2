"""In-process publish/subscribe channel for entity change events."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import AsyncGenerator
from typing import Any

from ..logging import get_logger

logger = get_logger(__name__)

PERSON_ADDED = "PERSON_ADDED"


class ChangeNotifier:
    """Fan-out of published payloads to the subscribers connected at publish time.

    Delivery is at-most-once and unpersisted: a subscriber that connects after
    a publish never sees it. One instance is created per process and handed to
    the GraphQL layer through the request context.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[str, set[asyncio.Queue[Any]]] = defaultdict(set)

    def publish(self, topic: str, payload: Any) -> int:
        """Deliver the payload to every current subscriber; returns how many got it."""
        queues = list(self._subscribers.get(topic, ()))
        for queue in queues:
            queue.put_nowait(payload)
        logger.debug("Published change event", topic=topic, subscribers=len(queues))
        return len(queues)

    async def subscribe(self, topic: str) -> AsyncGenerator[Any, None]:
        """Yield payloads published to the topic until the consumer closes the generator."""
        queue: asyncio.Queue[Any] = asyncio.Queue()
        self._subscribers[topic].add(queue)
        logger.info("Subscriber attached", topic=topic, subscribers=len(self._subscribers[topic]))
        try:
            while True:
                yield await queue.get()
        finally:
            self._subscribers[topic].discard(queue)
            if not self._subscribers[topic]:
                del self._subscribers[topic]
            logger.info("Subscriber detached", topic=topic)

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))
