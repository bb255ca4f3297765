from __future__ import annotations

import uuid
from collections import deque
from typing import Deque, List, Optional, Tuple

from hiretrack.application.services.worker import DeliveryResult, NotificationWorker
from hiretrack.core.errors import DispatchFailure, TransientDeliveryError
from hiretrack.domain.application import NotificationRequest


class InMemoryNotificationQueue:
    """
    FIFO queue kept in process memory (useful for tests/evals).

    ``available=False`` makes every enqueue fail as if Redis were down.
    """

    def __init__(self, *, max_tries: int = 3) -> None:
        self.pending: Deque[Tuple[str, dict, int]] = deque()
        self.failed: List[Tuple[str, dict, str]] = []
        self.max_tries = max_tries
        self.available = True

    async def enqueue(self, request: NotificationRequest) -> str:
        if not self.available:
            raise DispatchFailure(message="Notification queue unavailable", context={"recipient": request.recipient})
        job_id = uuid.uuid4().hex
        self.pending.append((job_id, request.to_payload(), 1))
        return job_id

    @property
    def payloads(self) -> List[dict]:
        return [payload for _, payload, _ in self.pending]

    async def drain(self, worker: NotificationWorker, limit: Optional[int] = None) -> List[DeliveryResult]:
        """
        Deliver pending jobs one at a time.

        Transient failures are re-queued with the same payload until ``max_tries``;
        after that the job moves to ``failed``.
        """
        results: List[DeliveryResult] = []
        processed = 0
        while self.pending and (limit is None or processed < limit):
            job_id, payload, attempt = self.pending.popleft()
            processed += 1
            try:
                result = await worker.deliver_payload(payload)
            except TransientDeliveryError as e:
                if attempt >= self.max_tries:
                    self.failed.append((job_id, payload, str(e)))
                else:
                    self.pending.append((job_id, payload, attempt + 1))
                continue
            if not result.ok:
                self.failed.append((job_id, payload, result.error or ""))
            results.append(result)
        return results
