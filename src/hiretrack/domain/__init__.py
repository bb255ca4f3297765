"""
Domain layer: pipeline stages, applications and their audit trail.
"""

from .stage import (
    Stage,
    TRANSITIONS,
    TERMINAL_STAGES,
    get_valid_next_stages,
    is_terminal,
    is_valid_transition,
)
from .application import (
    Application,
    ApplicationHistoryEntry,
    JobSnapshot,
    JobStatus,
    NotificationRequest,
    Role,
    utcnow,
)

__all__ = [
    "Stage",
    "TRANSITIONS",
    "TERMINAL_STAGES",
    "get_valid_next_stages",
    "is_terminal",
    "is_valid_transition",
    "Application",
    "ApplicationHistoryEntry",
    "JobSnapshot",
    "JobStatus",
    "NotificationRequest",
    "Role",
    "utcnow",
]
