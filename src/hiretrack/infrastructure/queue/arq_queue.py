"""
ARQ-backed notification queue (producer side).

The dispatcher hands every NotificationRequest to ``enqueue``; the request is
stored in Redis under the worker's queue name and picked up by
``send_notification_job`` in ``arq_worker``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from arq.connections import ArqRedis, RedisSettings, create_pool

from hiretrack.config.settings import RedisConfig, get_settings
from hiretrack.core.errors import DispatchFailure
from hiretrack.domain.application import NotificationRequest

logger = logging.getLogger(__name__)

SEND_NOTIFICATION_JOB = "send_notification_job"


def redis_settings_from(config: Optional[RedisConfig] = None) -> RedisSettings:
    config = config or get_settings().redis
    return RedisSettings(
        host=config.host,
        port=config.port,
        database=config.database,
        password=config.password or None,
    )


class ArqNotificationQueue:
    """
    Usage:
        queue = ArqNotificationQueue()
        job_id = await queue.enqueue(request)
        await queue.close()
    """

    def __init__(
        self,
        redis_settings: Optional[RedisSettings] = None,
        *,
        queue_name: Optional[str] = None,
        enqueue_timeout: float = 5.0,
        pool: Optional[ArqRedis] = None,
    ):
        self.redis_settings = redis_settings or redis_settings_from()
        self.queue_name = queue_name or get_settings().queue.queue_name
        self.enqueue_timeout = enqueue_timeout
        self._pool: Optional[ArqRedis] = pool

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._pool is None:
            self._pool = await create_pool(self.redis_settings, default_queue_name=self.queue_name)

    async def close(self) -> None:
        """Close Redis connection."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def _ensure_connected(self) -> ArqRedis:
        if self._pool is None:
            await self.connect()
        return self._pool  # type: ignore[return-value]

    async def enqueue(self, request: NotificationRequest) -> str:
        try:
            pool = await asyncio.wait_for(self._ensure_connected(), timeout=self.enqueue_timeout)
            job = await asyncio.wait_for(
                pool.enqueue_job(SEND_NOTIFICATION_JOB, request.to_payload(), _queue_name=self.queue_name),
                timeout=self.enqueue_timeout,
            )
        except asyncio.TimeoutError as e:
            raise DispatchFailure(
                message=f"Timed out queueing notification for {request.recipient}",
                context={"recipient": request.recipient, "timeout": self.enqueue_timeout},
            ) from e
        if job is None:
            # arq returns None only when a job with the same id already exists.
            raise DispatchFailure(
                message="Queue refused duplicate notification job",
                context={"recipient": request.recipient},
            )
        logger.debug("Enqueued %s as job %s", SEND_NOTIFICATION_JOB, job.job_id)
        return job.job_id
