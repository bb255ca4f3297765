from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from hiretrack.core.errors import DuplicateApplicationError, NotFoundError, StaleStageError, StorageFailure
from hiretrack.domain.application import (
    Application,
    ApplicationHistoryEntry,
    JobSnapshot,
    JobStatus,
    Role,
)
from hiretrack.domain.stage import Stage


@dataclass
class _User:
    id: int
    email: str
    role: Role
    company_id: Optional[int] = None


@dataclass
class _Job:
    id: int
    title: str
    status: JobStatus
    company_id: Optional[int] = None


@dataclass
class _Tables:
    applications: Dict[int, Application] = field(default_factory=dict)
    history: List[ApplicationHistoryEntry] = field(default_factory=list)


class InMemoryApplicationStore:
    """
    In-process store with the same transactional contract as the SQL store
    (useful for tests/evals).

    Writes are staged and only published once the whole unit succeeds; set
    ``fail_next_write`` to make the next atomic write abort after staging.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tables = _Tables()
        self._users: Dict[int, _User] = {}
        self._companies: Dict[int, str] = {}
        self._jobs: Dict[int, _Job] = {}
        self._next_id = {"application": 1, "history": 1, "user": 1, "company": 1, "job": 1}
        self.fail_next_write = False

    def _take_id(self, kind: str) -> int:
        value = self._next_id[kind]
        self._next_id[kind] = value + 1
        return value

    def _maybe_fail(self, action: str) -> None:
        if self.fail_next_write:
            self.fail_next_write = False
            raise StorageFailure(message=f"Simulated storage failure during {action}")

    # ---- directory seeding ----

    def add_company(self, name: str) -> int:
        with self._lock:
            company_id = self._take_id("company")
            self._companies[company_id] = name
            return company_id

    def add_user(
        self,
        email: str,
        *,
        role: Role = Role.CANDIDATE,
        company_id: Optional[int] = None,
        name: str = "",
    ) -> int:
        with self._lock:
            user_id = self._take_id("user")
            self._users[user_id] = _User(id=user_id, email=email, role=Role(role), company_id=company_id)
            return user_id

    def add_job(self, title: str, *, company_id: Optional[int] = None, status: JobStatus = JobStatus.OPEN) -> int:
        with self._lock:
            job_id = self._take_id("job")
            self._jobs[job_id] = _Job(id=job_id, title=title, status=JobStatus(status), company_id=company_id)
            return job_id

    def set_job_status(self, job_id: int, status: JobStatus) -> None:
        with self._lock:
            self._jobs[job_id].status = JobStatus(status)

    # ---- lookups ----

    def find_application(self, job_id: int, candidate_id: int) -> Optional[Application]:
        with self._lock:
            for app in self._tables.applications.values():
                if app.job_id == job_id and app.candidate_id == candidate_id:
                    return replace(app)
            return None

    def get_application(self, application_id: int) -> Optional[Application]:
        with self._lock:
            app = self._tables.applications.get(application_id)
            return replace(app) if app is not None else None

    def find_job_with_recruiters(self, job_id: int) -> Optional[JobSnapshot]:
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None
            emails = [
                u.email
                for u in sorted(self._users.values(), key=lambda u: u.id)
                if job.company_id is not None and u.company_id == job.company_id and u.role == Role.RECRUITER
            ]
            return JobSnapshot(
                id=job.id,
                title=job.title,
                status=job.status,
                company_id=job.company_id,
                recruiter_emails=emails,
            )

    def find_user_email(self, user_id: int) -> Optional[str]:
        with self._lock:
            user = self._users.get(user_id)
            return user.email if user is not None else None

    def list_history(self, application_id: int) -> List[ApplicationHistoryEntry]:
        with self._lock:
            return [e for e in self._tables.history if e.application_id == application_id]

    def count_applications(self) -> int:
        with self._lock:
            return len(self._tables.applications)

    def count_history(self) -> int:
        with self._lock:
            return len(self._tables.history)

    # ---- atomic writes ----

    def create_application_with_history(
        self, application: Application, entry: ApplicationHistoryEntry
    ) -> Tuple[Application, ApplicationHistoryEntry]:
        with self._lock:
            for app in self._tables.applications.values():
                if app.job_id == application.job_id and app.candidate_id == application.candidate_id:
                    raise DuplicateApplicationError(
                        message="You have already applied for this job",
                        context={"job_id": application.job_id, "candidate_id": application.candidate_id},
                    )
            app_id = self._next_id["application"]
            staged_app = replace(application, id=app_id)
            staged_entry = replace(entry, application_id=app_id, id=self._next_id["history"])
            self._maybe_fail("create_application_with_history")

            self._take_id("application")
            self._take_id("history")
            self._tables.applications[app_id] = staged_app
            self._tables.history.append(staged_entry)
            return replace(staged_app), staged_entry

    def update_application_with_history(
        self, application_id: int, new_stage: Stage, entry: ApplicationHistoryEntry
    ) -> Tuple[Application, ApplicationHistoryEntry]:
        with self._lock:
            current = self._tables.applications.get(application_id)
            if current is None:
                raise NotFoundError(message="Application not found", context={"application_id": application_id})
            if current.stage != entry.from_stage:
                raise StaleStageError(
                    message="Application stage changed concurrently",
                    context={
                        "application_id": application_id,
                        "expected": entry.from_stage.value,
                        "actual": current.stage.value,
                    },
                )
            staged_app = replace(current, stage=new_stage, updated_at=entry.changed_at)
            staged_entry = replace(entry, application_id=application_id, id=self._next_id["history"])
            self._maybe_fail("update_application_with_history")

            self._take_id("history")
            self._tables.applications[application_id] = staged_app
            self._tables.history.append(staged_entry)
            return replace(staged_app), staged_entry
