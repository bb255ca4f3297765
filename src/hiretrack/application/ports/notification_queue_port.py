from __future__ import annotations

from typing import Protocol, runtime_checkable

from hiretrack.domain.application import NotificationRequest


@runtime_checkable
class NotificationQueuePort(Protocol):
    """
    Durable work queue between the dispatcher (producer) and the worker (consumer).

    ``enqueue`` returns once the request is stored by the queue, never after delivery.
    """

    async def enqueue(self, request: NotificationRequest) -> str:
        """Queue the request and return the queue's job id."""
