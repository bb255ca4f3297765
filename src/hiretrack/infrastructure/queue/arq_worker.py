"""
ARQ worker for notification delivery.

Run with ``arq hiretrack.infrastructure.queue.arq_worker.WorkerSettings`` or
``hiretrack worker``. Each job carries one ``{recipient, subject, body}`` payload;
transient transport failures are handed back to ARQ via ``Retry`` so the same
payload is re-sent later with linear backoff.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from arq.worker import Retry

from hiretrack.application.services.worker import NotificationWorker
from hiretrack.config.logging import configure_logging
from hiretrack.config.settings import get_settings
from hiretrack.core.errors import TransientDeliveryError
from hiretrack.infrastructure.mail import build_mail_transport
from hiretrack.infrastructure.queue.arq_queue import redis_settings_from

logger = logging.getLogger(__name__)


def _notification_worker() -> NotificationWorker:
    settings = get_settings()
    return NotificationWorker(build_mail_transport(settings.mail), sender=settings.mail.sender)


async def startup(ctx: Dict[str, Any]) -> None:
    settings = get_settings()
    configure_logging(settings.logging)
    ctx["notification_worker"] = _notification_worker()
    ctx["retry_delay"] = settings.queue.retry_delay
    ctx["max_tries"] = settings.queue.max_tries
    logger.info("Notification worker started (queue=%s)", settings.queue.queue_name)


async def shutdown(ctx: Dict[str, Any]) -> None:
    logger.info("Notification worker stopped")


async def send_notification_job(ctx: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    ARQ job: deliver one queued notification.

    Returns the delivery result; permanent failures return ``status="failed"``
    so ARQ records them without retrying.
    """
    worker: NotificationWorker = ctx.get("notification_worker") or _notification_worker()
    job_try = int(ctx.get("job_try") or 1)
    max_tries = int(ctx.get("max_tries") or get_settings().queue.max_tries)
    retry_delay = int(ctx.get("retry_delay") or get_settings().queue.retry_delay)

    try:
        result = await worker.deliver_payload(payload)
    except TransientDeliveryError as e:
        if job_try >= max_tries:
            logger.error(
                "Giving up on notification to %s after %d attempts: %s",
                payload.get("recipient"),
                job_try,
                e,
            )
            raise
        raise Retry(defer=job_try * retry_delay) from e

    return {"job_id": ctx.get("job_id"), "attempt": job_try, **result.to_dict()}


class WorkerSettings:
    functions = [send_notification_job]
    on_startup = startup
    on_shutdown = shutdown

    redis_settings = redis_settings_from()
    queue_name = get_settings().queue.queue_name
    max_jobs = get_settings().queue.max_jobs
    max_tries = get_settings().queue.max_tries
    job_timeout = get_settings().queue.job_timeout
