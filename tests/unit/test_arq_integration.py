"""
ARQ queue adapter and worker job tests (no Redis needed)
"""

import asyncio

import pytest
from arq.worker import Retry

from hiretrack.application.services import NotificationWorker
from hiretrack.core.errors import DispatchFailure, PermanentDeliveryError, TransientDeliveryError
from hiretrack.domain.application import NotificationRequest
from hiretrack.infrastructure.queue.arq_queue import SEND_NOTIFICATION_JOB, ArqNotificationQueue
from hiretrack.infrastructure.queue.arq_worker import WorkerSettings, send_notification_job


class FakeJob:
    def __init__(self, job_id):
        self.job_id = job_id


class FakePool:
    def __init__(self, job=FakeJob("job-1"), delay=0.0):
        self.calls = []
        self._job = job
        self._delay = delay

    async def enqueue_job(self, function, *args, **kwargs):
        if self._delay:
            await asyncio.sleep(self._delay)
        self.calls.append((function, args, kwargs))
        return self._job


class ScriptedTransport:
    def __init__(self, error=None):
        self.error = error

    def send(self, *, sender, recipient, subject, body):
        if self.error is not None:
            raise self.error
        return "250 ok"


def _payload():
    return NotificationRequest(recipient="a@x.test", subject="Hi", body="Body").to_payload()


class TestArqNotificationQueue:
    @pytest.mark.asyncio
    async def test_enqueue_sends_payload_to_job(self):
        pool = FakePool()
        queue = ArqNotificationQueue(pool=pool, queue_name="test:notifications")

        job_id = await queue.enqueue(NotificationRequest(recipient="a@x.test", subject="Hi", body="Body"))

        assert job_id == "job-1"
        function, args, kwargs = pool.calls[0]
        assert function == SEND_NOTIFICATION_JOB
        assert args[0]["recipient"] == "a@x.test"
        assert args[0]["subject"] == "Hi"

    @pytest.mark.asyncio
    async def test_duplicate_job_is_dispatch_failure(self):
        queue = ArqNotificationQueue(pool=FakePool(job=None))
        with pytest.raises(DispatchFailure):
            await queue.enqueue(NotificationRequest(recipient="a@x.test", subject="Hi", body="Body"))

    @pytest.mark.asyncio
    async def test_slow_queue_times_out(self):
        queue = ArqNotificationQueue(pool=FakePool(delay=1.0), enqueue_timeout=0.01)
        with pytest.raises(DispatchFailure):
            await queue.enqueue(NotificationRequest(recipient="a@x.test", subject="Hi", body="Body"))


class TestSendNotificationJob:
    @pytest.mark.asyncio
    async def test_successful_delivery(self):
        ctx = {"notification_worker": NotificationWorker(ScriptedTransport(), sender="s@x"), "job_try": 1, "job_id": "j1"}
        result = await send_notification_job(ctx, _payload())
        assert result["status"] == "sent"
        assert result["job_id"] == "j1"
        assert result["attempt"] == 1

    @pytest.mark.asyncio
    async def test_transient_failure_requests_retry_with_backoff(self):
        worker = NotificationWorker(ScriptedTransport(TransientDeliveryError(message="busy")), sender="s@x")
        ctx = {"notification_worker": worker, "job_try": 2, "max_tries": 5, "retry_delay": 10}
        with pytest.raises(Retry) as exc:
            await send_notification_job(ctx, _payload())
        assert exc.value.defer_score == 20_000

    @pytest.mark.asyncio
    async def test_transient_failure_on_last_try_is_raised(self):
        worker = NotificationWorker(ScriptedTransport(TransientDeliveryError(message="busy")), sender="s@x")
        ctx = {"notification_worker": worker, "job_try": 5, "max_tries": 5, "retry_delay": 10}
        with pytest.raises(TransientDeliveryError):
            await send_notification_job(ctx, _payload())

    @pytest.mark.asyncio
    async def test_permanent_failure_returns_failed(self):
        worker = NotificationWorker(ScriptedTransport(PermanentDeliveryError(message="refused")), sender="s@x")
        result = await send_notification_job({"notification_worker": worker, "job_try": 1}, _payload())
        assert result["status"] == "failed"


def test_worker_settings_register_job():
    assert send_notification_job in WorkerSettings.functions
    assert WorkerSettings.max_tries >= 1
