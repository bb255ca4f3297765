"""
Application Lifecycle Engine.

Orchestrates the two mutating use cases:

- submit_application: validate job/candidate/duplicate, create the application and
  its creation audit entry atomically, then queue confirmation e-mails.
- change_stage: validate the transition against the pipeline policy, update the
  stage and append the audit entry atomically, then queue the candidate e-mail.

Every commit step returns the outbox of notifications it produced; the outbox is
handed to the dispatcher only after the transaction has finished. A dispatch
failure is reported as a warning on the outcome and never undoes the commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, FrozenSet, List, Optional, Tuple, Union

from hiretrack.application import notifications
from hiretrack.application.ports.application_store_port import ApplicationStorePort
from hiretrack.application.services.dispatcher import NotificationDispatcher
from hiretrack.core.errors import (
    DispatchFailure,
    DuplicateApplicationError,
    InvalidTransitionError,
    NotAvailableError,
    NotFoundError,
)
from hiretrack.domain.application import (
    Application,
    ApplicationHistoryEntry,
    JobSnapshot,
    NotificationRequest,
    utcnow,
)
from hiretrack.domain.stage import Stage, get_valid_next_stages, is_valid_transition

logger = logging.getLogger(__name__)


@dataclass
class LifecycleOutcome:
    """Committed application state plus what happened to its notifications."""

    application: Application
    history_entry: ApplicationHistoryEntry
    queued: List[str] = field(default_factory=list)
    warnings: List[DispatchFailure] = field(default_factory=list)

    @property
    def fully_notified(self) -> bool:
        return not self.warnings

    def to_dict(self):
        return {
            "application": self.application.to_dict(),
            "history_entry": self.history_entry.to_dict(),
            "queued": list(self.queued),
            "warnings": [w.to_dict() for w in self.warnings],
        }


class ApplicationLifecycleEngine:
    def __init__(
        self,
        store: ApplicationStorePort,
        dispatcher: NotificationDispatcher,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._store = store
        self._dispatcher = dispatcher
        self._clock = clock or utcnow

    # ---- submit ----

    async def submit_application(self, job_id: int, candidate_id: int) -> LifecycleOutcome:
        job = self._store.find_job_with_recruiters(job_id)
        if job is None:
            raise NotFoundError(message=f"Job {job_id} not found", context={"job_id": job_id})
        if not job.is_open:
            raise NotAvailableError(
                message="Job not available for application",
                context={"job_id": job_id, "status": job.status.value},
            )

        candidate_email = self._store.find_user_email(candidate_id)
        if candidate_email is None:
            raise NotFoundError(
                message=f"Candidate {candidate_id} not found",
                context={"candidate_id": candidate_id},
            )

        if self._store.find_application(job_id, candidate_id) is not None:
            raise DuplicateApplicationError(
                message="You have already applied for this job",
                context={"job_id": job_id, "candidate_id": candidate_id},
            )

        application, entry, outbox = self._commit_submission(job, candidate_id, candidate_email)
        logger.info(
            "Application %s created for job %s by candidate %s",
            application.id,
            job_id,
            candidate_id,
        )
        return await self._finish(application, entry, outbox)

    def _commit_submission(
        self, job: JobSnapshot, candidate_id: int, candidate_email: str
    ) -> Tuple[Application, ApplicationHistoryEntry, List[NotificationRequest]]:
        outbox = notifications.submission_outbox(candidate_email, job)
        if not candidate_email:
            logger.warning(
                "No e-mail on file for candidate %s; skipping submission confirmation",
                candidate_id,
            )
        now = self._clock()
        draft = Application(job_id=job.id, candidate_id=candidate_id, stage=Stage.APPLIED, created_at=now)
        entry = ApplicationHistoryEntry(
            application_id=None,
            from_stage=Stage.APPLIED,
            to_stage=Stage.APPLIED,
            changed_by_id=candidate_id,
            changed_at=now,
        )
        created, stored_entry = self._store.create_application_with_history(draft, entry)
        return created, stored_entry, outbox

    # ---- change stage ----

    async def change_stage(
        self,
        application_id: int,
        next_stage: Union[Stage, str],
        changed_by_id: int,
    ) -> LifecycleOutcome:
        """
        Move an application one edge along the pipeline.

        ``changed_by_id`` is recorded for audit only; callers are expected to have
        authorized the actor already.
        """
        application = self._require_application(application_id)
        current = application.stage

        target = Stage.parse(next_stage, current=current)
        if not is_valid_transition(current, target):
            raise InvalidTransitionError(
                message=f"Invalid transition from {current.value} to {target.value}",
                current=current.value,
                attempted=target.value,
            )

        candidate_email = self._store.find_user_email(application.candidate_id)
        job = self._store.find_job_with_recruiters(application.job_id)

        updated, entry, outbox = self._commit_transition(
            application, target, changed_by_id, candidate_email, job
        )
        logger.info(
            "Application %s moved %s -> %s by user %s",
            application_id,
            current.value,
            target.value,
            changed_by_id,
        )
        return await self._finish(updated, entry, outbox)

    def _commit_transition(
        self,
        application: Application,
        target: Stage,
        changed_by_id: int,
        candidate_email: Optional[str],
        job: Optional[JobSnapshot],
    ) -> Tuple[Application, ApplicationHistoryEntry, List[NotificationRequest]]:
        entry = ApplicationHistoryEntry(
            application_id=application.id,
            from_stage=application.stage,
            to_stage=target,
            changed_by_id=changed_by_id,
            changed_at=self._clock(),
        )

        outbox: List[NotificationRequest] = []
        if candidate_email:
            job_title = job.title if job is not None else f"#{application.job_id}"
            outbox.append(notifications.stage_changed(candidate_email, job_title, entry.from_stage, target))
        else:
            logger.warning(
                "No e-mail on file for candidate %s; skipping stage notification",
                application.candidate_id,
            )

        updated, stored_entry = self._store.update_application_with_history(application.id, target, entry)
        return updated, stored_entry, outbox

    # ---- queries ----

    def get_application(self, application_id: int) -> Application:
        return self._require_application(application_id)

    def get_valid_next_stages(self, application_id: int) -> FrozenSet[Stage]:
        return get_valid_next_stages(self._require_application(application_id).stage)

    def get_history(self, application_id: int) -> List[ApplicationHistoryEntry]:
        self._require_application(application_id)
        return self._store.list_history(application_id)

    # ---- helpers ----

    def _require_application(self, application_id: int) -> Application:
        application = self._store.get_application(application_id)
        if application is None:
            raise NotFoundError(
                message="Application not found",
                context={"application_id": application_id},
            )
        return application

    async def _finish(
        self,
        application: Application,
        entry: ApplicationHistoryEntry,
        outbox: List[NotificationRequest],
    ) -> LifecycleOutcome:
        queued, failures = await self._dispatcher.dispatch(outbox)
        if failures:
            logger.warning(
                "Application %s committed but %d of %d notifications were not queued",
                application.id,
                len(failures),
                len(outbox),
            )
        return LifecycleOutcome(
            application=application,
            history_entry=entry,
            queued=queued,
            warnings=failures,
        )
