"""
Application records, their audit trail and queued notifications.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from hiretrack.domain.stage import Stage


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    DRAFT = "DRAFT"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Role(str, Enum):
    CANDIDATE = "CANDIDATE"
    RECRUITER = "RECRUITER"
    HIRING_MANAGER = "HIRING_MANAGER"
    ADMIN = "ADMIN"


@dataclass
class Application:
    """One candidate's pursuit of one job."""

    job_id: int
    candidate_id: int
    stage: Stage = Stage.APPLIED
    id: Optional[int] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "job_id": self.job_id,
            "candidate_id": self.candidate_id,
            "stage": self.stage.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class ApplicationHistoryEntry:
    """Immutable audit record of one committed stage change."""

    application_id: Optional[int]
    from_stage: Stage
    to_stage: Stage
    changed_by_id: int
    changed_at: datetime = field(default_factory=utcnow)
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "application_id": self.application_id,
            "from_stage": self.from_stage.value,
            "to_stage": self.to_stage.value,
            "changed_by_id": self.changed_by_id,
            "changed_at": self.changed_at.isoformat(),
        }


@dataclass
class JobSnapshot:
    """Job status plus the e-mail addresses of its company's recruiters."""

    id: int
    title: str
    status: JobStatus
    company_id: Optional[int] = None
    recruiter_emails: List[str] = field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN


@dataclass
class NotificationRequest:
    """A queued unit of outbound e-mail."""

    recipient: str
    subject: str
    body: str
    enqueued_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if not self.recipient:
            raise ValueError("Notification recipient cannot be empty")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "recipient": self.recipient,
            "subject": self.subject,
            "body": self.body,
            "enqueued_at": self.enqueued_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "NotificationRequest":
        raw_ts = payload.get("enqueued_at")
        enqueued_at = utcnow()
        if isinstance(raw_ts, datetime):
            enqueued_at = raw_ts
        elif isinstance(raw_ts, str) and raw_ts:
            enqueued_at = datetime.fromisoformat(raw_ts)
        return cls(
            recipient=str(payload.get("recipient") or ""),
            subject=str(payload.get("subject") or ""),
            body=str(payload.get("body") or ""),
            enqueued_at=enqueued_at,
        )
