# tests/conftest.py
"""
Pytest configuration and fixtures.
Adds src to sys.path so `import hiretrack` works without installing the package.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

project_root = Path(__file__).parent.parent
src_root = project_root / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from hiretrack.application.services import ApplicationLifecycleEngine, NotificationDispatcher  # noqa: E402
from hiretrack.domain.application import JobStatus, Role  # noqa: E402
from hiretrack.infrastructure.queue.memory_queue import InMemoryNotificationQueue  # noqa: E402
from hiretrack.infrastructure.stores.memory_store import InMemoryApplicationStore  # noqa: E402


def seed_directory(store) -> SimpleNamespace:
    """One company with two recruiters, one hiring manager, two candidates and three jobs."""
    company_id = store.add_company("Acme")
    other_company_id = store.add_company("Globex")
    return SimpleNamespace(
        company_id=company_id,
        recruiter_id=store.add_user("recruiter1@acme.test", role=Role.RECRUITER, company_id=company_id),
        recruiter2_id=store.add_user("recruiter2@acme.test", role=Role.RECRUITER, company_id=company_id),
        manager_id=store.add_user("manager@acme.test", role=Role.HIRING_MANAGER, company_id=company_id),
        outsider_id=store.add_user("recruiter@globex.test", role=Role.RECRUITER, company_id=other_company_id),
        candidate_id=store.add_user("alice@example.test"),
        other_candidate_id=store.add_user("bob@example.test"),
        open_job_id=store.add_job("Backend Engineer", company_id=company_id),
        closed_job_id=store.add_job("Closed Role", company_id=company_id, status=JobStatus.CLOSED),
        draft_job_id=store.add_job("Draft Role", company_id=company_id, status=JobStatus.DRAFT),
    )


@pytest.fixture
def store():
    return InMemoryApplicationStore()


@pytest.fixture
def directory(store):
    return seed_directory(store)


@pytest.fixture
def queue():
    return InMemoryNotificationQueue()


@pytest.fixture
def dispatcher(queue):
    return NotificationDispatcher(queue)


@pytest.fixture
def engine(store, dispatcher):
    return ApplicationLifecycleEngine(store, dispatcher)


@pytest.fixture
def seed():
    return seed_directory
