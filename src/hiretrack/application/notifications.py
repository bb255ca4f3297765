"""
Outbound message templates.

Each builder returns a fully-formed ``NotificationRequest``; nothing here touches
the queue, so the engine can compute its outbox before handing it off.
"""

from __future__ import annotations

from typing import List

from hiretrack.domain.application import JobSnapshot, NotificationRequest
from hiretrack.domain.stage import Stage


def application_submitted(candidate_email: str, job: JobSnapshot) -> NotificationRequest:
    return NotificationRequest(
        recipient=candidate_email,
        subject="Application Submitted",
        body=f'Your application for the job "{job.title}" has been successfully submitted.',
    )


def new_application_received(recruiter_email: str, job: JobSnapshot) -> NotificationRequest:
    return NotificationRequest(
        recipient=recruiter_email,
        subject="New Application Received",
        body=f'A new candidate has applied for your job posting "{job.title}".',
    )


def submission_outbox(candidate_email: str, job: JobSnapshot) -> List[NotificationRequest]:
    """Candidate confirmation first, then one message per recruiter; blank addresses are skipped."""
    outbox = [application_submitted(candidate_email, job)] if candidate_email else []
    for email in job.recruiter_emails:
        if email:
            outbox.append(new_application_received(email, job))
    return outbox


def stage_changed(
    candidate_email: str, job_title: str, from_stage: Stage, to_stage: Stage
) -> NotificationRequest:
    return NotificationRequest(
        recipient=candidate_email,
        subject=f"Application Stage Updated: {to_stage.label}",
        body=(
            "Hello!\n\n"
            f'Your application for job "{job_title}" moved from '
            f'"{from_stage.label}" to "{to_stage.label}".'
        ),
    )
