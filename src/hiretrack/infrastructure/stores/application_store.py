from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hiretrack.core.errors import DuplicateApplicationError, NotFoundError, StaleStageError, StorageFailure
from hiretrack.domain.application import (
    Application,
    ApplicationHistoryEntry,
    JobSnapshot,
    JobStatus,
    Role,
)
from hiretrack.domain.stage import Stage
from hiretrack.infrastructure.stores.models import (
    ApplicationHistoryModel,
    ApplicationModel,
    Base,
    CompanyModel,
    JobModel,
    UserModel,
)
from hiretrack.infrastructure.stores.sqlalchemy_db import SessionProvider, get_db_url

logger = logging.getLogger(__name__)


def _as_utc(ts: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back.
    if ts is None:
        return None
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def _job_status(raw: str) -> JobStatus:
    try:
        return JobStatus((raw or "").upper())
    except ValueError:
        return JobStatus.CLOSED


def _to_application(row: ApplicationModel) -> Application:
    return Application(
        id=row.id,
        job_id=row.job_id,
        candidate_id=row.candidate_id,
        stage=Stage(row.stage),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _to_entry(row: ApplicationHistoryModel) -> ApplicationHistoryEntry:
    return ApplicationHistoryEntry(
        id=row.id,
        application_id=row.application_id,
        from_stage=Stage(row.from_stage),
        to_stage=Stage(row.to_stage),
        changed_by_id=row.changed_by_id,
        changed_at=_as_utc(row.changed_at),
    )


class SqlAlchemyApplicationStore:
    """
    Relational store for applications and their audit trail.

    - create/update_application_with_history run in one transaction each
    - stage updates are compare-and-set on the previous stage, so two writers
      validating against the same snapshot cannot both commit
    """

    def __init__(self, db_url: Optional[str] = None, *, auto_create_schema: bool = True):
        self.db_url = db_url or get_db_url()
        self._provider = SessionProvider(self.db_url)
        if auto_create_schema:
            # In production, prefer Alembic migrations.
            Base.metadata.create_all(self._provider.engine)

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error("Storage failure during %s: %s", action, e)
            raise StorageFailure(message=f"Storage failure during {action}", context={"error": str(e)}) from e

    # ---- lookups ----

    def find_application(self, job_id: int, candidate_id: int) -> Optional[Application]:
        with self._storage_errors("find_application"), self._provider.session() as session:
            row = session.execute(
                select(ApplicationModel).where(
                    ApplicationModel.job_id == job_id,
                    ApplicationModel.candidate_id == candidate_id,
                )
            ).scalar_one_or_none()
            return _to_application(row) if row is not None else None

    def get_application(self, application_id: int) -> Optional[Application]:
        with self._storage_errors("get_application"), self._provider.session() as session:
            row = session.get(ApplicationModel, application_id)
            return _to_application(row) if row is not None else None

    def find_job_with_recruiters(self, job_id: int) -> Optional[JobSnapshot]:
        with self._storage_errors("find_job_with_recruiters"), self._provider.session() as session:
            job = session.get(JobModel, job_id)
            if job is None:
                return None
            emails: List[str] = []
            if job.company_id is not None:
                emails = list(
                    session.execute(
                        select(UserModel.email)
                        .where(UserModel.company_id == job.company_id, UserModel.role == Role.RECRUITER.value)
                        .order_by(UserModel.id)
                    ).scalars()
                )
            return JobSnapshot(
                id=job.id,
                title=job.title,
                status=_job_status(job.status),
                company_id=job.company_id,
                recruiter_emails=emails,
            )

    def find_user_email(self, user_id: int) -> Optional[str]:
        with self._storage_errors("find_user_email"), self._provider.session() as session:
            user = session.get(UserModel, user_id)
            return user.email if user is not None else None

    def list_history(self, application_id: int) -> List[ApplicationHistoryEntry]:
        with self._storage_errors("list_history"), self._provider.session() as session:
            rows = session.execute(
                select(ApplicationHistoryModel)
                .where(ApplicationHistoryModel.application_id == application_id)
                .order_by(ApplicationHistoryModel.id)
            ).scalars()
            return [_to_entry(r) for r in rows]

    # ---- atomic writes ----

    def create_application_with_history(
        self, application: Application, entry: ApplicationHistoryEntry
    ) -> Tuple[Application, ApplicationHistoryEntry]:
        try:
            with self._provider.transaction() as session:
                row = ApplicationModel(
                    job_id=application.job_id,
                    candidate_id=application.candidate_id,
                    stage=application.stage.value,
                    created_at=application.created_at,
                )
                session.add(row)
                session.flush()
                history_row = ApplicationHistoryModel(
                    application_id=row.id,
                    from_stage=entry.from_stage.value,
                    to_stage=entry.to_stage.value,
                    changed_by_id=entry.changed_by_id,
                    changed_at=entry.changed_at,
                )
                session.add(history_row)
                session.flush()
                created = _to_application(row), _to_entry(history_row)
        except IntegrityError as e:
            if self.find_application(application.job_id, application.candidate_id) is not None:
                raise DuplicateApplicationError(
                    message="You have already applied for this job",
                    context={"job_id": application.job_id, "candidate_id": application.candidate_id},
                ) from e
            raise StorageFailure(message="Could not create application", context={"error": str(e)}) from e
        except SQLAlchemyError as e:
            raise StorageFailure(message="Could not create application", context={"error": str(e)}) from e
        return created

    def update_application_with_history(
        self, application_id: int, new_stage: Stage, entry: ApplicationHistoryEntry
    ) -> Tuple[Application, ApplicationHistoryEntry]:
        with self._storage_errors("update_application_with_history"):
            with self._provider.transaction() as session:
                result = session.execute(
                    update(ApplicationModel)
                    .where(
                        ApplicationModel.id == application_id,
                        ApplicationModel.stage == entry.from_stage.value,
                    )
                    .values(stage=new_stage.value, updated_at=entry.changed_at)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    current = session.get(ApplicationModel, application_id)
                    if current is None:
                        raise NotFoundError(
                            message="Application not found",
                            context={"application_id": application_id},
                        )
                    raise StaleStageError(
                        message="Application stage changed concurrently",
                        context={
                            "application_id": application_id,
                            "expected": entry.from_stage.value,
                            "actual": current.stage,
                        },
                    )
                history_row = ApplicationHistoryModel(
                    application_id=application_id,
                    from_stage=entry.from_stage.value,
                    to_stage=new_stage.value,
                    changed_by_id=entry.changed_by_id,
                    changed_at=entry.changed_at,
                )
                session.add(history_row)
                session.flush()
                row = session.get(ApplicationModel, application_id)
                return _to_application(row), _to_entry(history_row)

    # ---- directory seeding (fixtures / bootstrap only) ----

    def add_company(self, name: str) -> int:
        with self._storage_errors("add_company"), self._provider.transaction() as session:
            company = CompanyModel(name=name)
            session.add(company)
            session.flush()
            return company.id

    def add_user(
        self,
        email: str,
        *,
        role: Role = Role.CANDIDATE,
        company_id: Optional[int] = None,
        name: str = "",
    ) -> int:
        with self._storage_errors("add_user"), self._provider.transaction() as session:
            user = UserModel(email=email, role=Role(role).value, company_id=company_id, name=name)
            session.add(user)
            session.flush()
            return user.id

    def add_job(self, title: str, *, company_id: Optional[int] = None, status: JobStatus = JobStatus.OPEN) -> int:
        with self._storage_errors("add_job"), self._provider.transaction() as session:
            job = JobModel(title=title, company_id=company_id, status=JobStatus(status).value)
            session.add(job)
            session.flush()
            return job.id

    def close(self) -> None:
        self._provider.engine.dispose()
