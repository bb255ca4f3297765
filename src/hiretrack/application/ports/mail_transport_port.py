from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MailTransportPort(Protocol):
    """Delivery transport used only by the notification worker."""

    def send(self, *, sender: str, recipient: str, subject: str, body: str) -> str:
        """Deliver one message and return the transport's response text."""
