from __future__ import annotations

from typing import List, Optional, Protocol, Tuple, runtime_checkable

from hiretrack.domain.application import Application, ApplicationHistoryEntry, JobSnapshot
from hiretrack.domain.stage import Stage


@runtime_checkable
class ApplicationStorePort(Protocol):
    """
    Storage collaborator consumed by the lifecycle engine.

    The two ``*_with_history`` methods are atomic units: the application row and
    its audit entry commit together or not at all.
    """

    def find_application(self, job_id: int, candidate_id: int) -> Optional[Application]:
        """Look up the application for a (job, candidate) pair."""

    def get_application(self, application_id: int) -> Optional[Application]:
        """Look up an application by id."""

    def create_application_with_history(
        self, application: Application, entry: ApplicationHistoryEntry
    ) -> Tuple[Application, ApplicationHistoryEntry]:
        """Insert the application and its creation entry in one transaction; returns both as stored."""

    def update_application_with_history(
        self, application_id: int, new_stage: Stage, entry: ApplicationHistoryEntry
    ) -> Tuple[Application, ApplicationHistoryEntry]:
        """
        Move the application to ``new_stage`` and append ``entry`` in one transaction.

        The write only applies while the stored stage still equals ``entry.from_stage``. Returns the
        updated application and the stored entry.
        """

    def find_job_with_recruiters(self, job_id: int) -> Optional[JobSnapshot]:
        """Job status and recruiter e-mails of the owning company."""

    def find_user_email(self, user_id: int) -> Optional[str]:
        """E-mail of a user, or None when the user does not exist."""

    def list_history(self, application_id: int) -> List[ApplicationHistoryEntry]:
        """Audit entries of one application in commit order."""
