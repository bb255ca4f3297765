"""
Notification Worker - delivers queued notifications through the mail transport.

The worker only ever sends the exact queued payload. Retry and backoff belong to
the queue: a transient failure is re-raised for the queue to reschedule, a
permanent one ends the job with a failed result.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from hiretrack.application.ports.mail_transport_port import MailTransportPort
from hiretrack.core.errors import PermanentDeliveryError, TransientDeliveryError
from hiretrack.domain.application import NotificationRequest

logger = logging.getLogger(__name__)


@dataclass
class DeliveryResult:
    recipient: str
    status: str  # sent / failed
    response: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "sent"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recipient": self.recipient,
            "status": self.status,
            "response": self.response,
            "error": self.error,
        }


class NotificationWorker:
    def __init__(self, transport: MailTransportPort, sender: str):
        self.transport = transport
        self.sender = sender

    async def deliver(self, request: NotificationRequest) -> DeliveryResult:
        """
        Send one request.

        Raises:
            TransientDeliveryError: delivery may succeed on a later attempt.
        """
        logger.info("Delivering notification to %s: %s", request.recipient, request.subject)
        try:
            # smtplib is blocking; keep it off the event loop.
            response = await asyncio.to_thread(
                self.transport.send,
                sender=self.sender,
                recipient=request.recipient,
                subject=request.subject,
                body=request.body,
            )
        except TransientDeliveryError:
            logger.warning("Transient delivery failure for %s", request.recipient, exc_info=True)
            raise
        except PermanentDeliveryError as e:
            logger.error("Permanent delivery failure for %s: %s", request.recipient, e)
            return DeliveryResult(recipient=request.recipient, status="failed", error=str(e))

        logger.info("Notification sent to %s: %s", request.recipient, response)
        return DeliveryResult(recipient=request.recipient, status="sent", response=response)

    async def deliver_payload(self, payload: Dict[str, Any]) -> DeliveryResult:
        return await self.deliver(NotificationRequest.from_payload(payload))
