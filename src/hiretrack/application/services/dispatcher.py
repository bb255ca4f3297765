"""
Notification Dispatcher - hands notifications to the durable queue.

The dispatcher never waits for delivery; its only failure mode is the queue
refusing the request, reported as ``DispatchFailure``.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from hiretrack.application.ports.notification_queue_port import NotificationQueuePort
from hiretrack.core.errors import DispatchFailure, Result
from hiretrack.domain.application import NotificationRequest

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, queue: NotificationQueuePort):
        self._queue = queue

    async def enqueue(self, recipient: str, subject: str, body: str) -> str:
        """Queue one message; resolves once the queue has stored it."""
        request = NotificationRequest(recipient=recipient, subject=subject, body=body)
        return await self.enqueue_request(request)

    async def enqueue_request(self, request: NotificationRequest) -> str:
        try:
            job_id = await self._queue.enqueue(request)
        except DispatchFailure:
            raise
        except Exception as e:
            raise DispatchFailure(
                message=f"Could not queue notification for {request.recipient}: {e}",
                context={"recipient": request.recipient, "subject": request.subject},
            ) from e
        logger.debug("Queued notification %s for %s", job_id, request.recipient)
        return job_id

    async def try_enqueue(self, request: NotificationRequest) -> Result[str, DispatchFailure]:
        try:
            return Result.ok(await self.enqueue_request(request))
        except DispatchFailure as e:
            return Result.err(e)

    async def dispatch(
        self, requests: Iterable[NotificationRequest]
    ) -> Tuple[List[str], List[DispatchFailure]]:
        """
        Queue every request, continuing past individual failures.

        Returns the queued job ids and the failures, in request order.
        """
        queued: List[str] = []
        failures: List[DispatchFailure] = []
        for request in requests:
            result = await self.try_enqueue(request)
            if result.is_ok():
                queued.append(result.unwrap())
            else:
                err = result.error()
                logger.warning("Notification dispatch failed: %s", err)
                failures.append(err)  # type: ignore[arg-type]
        return queued, failures
