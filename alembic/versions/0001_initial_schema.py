"""initial schema

Revision ID: 0001_initial_schema
Revises: None
Create Date: 2026-10-17

Creates companies, users, jobs, applications and application_history.
Online upgrades skip tables that already exist (local DBs created via create_all).
"""

from __future__ import annotations

from alembic import context, op
import sqlalchemy as sa


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _is_offline() -> bool:
    try:
        return bool(context.is_offline_mode())
    except Exception:
        return False


def _insp():
    return sa.inspect(op.get_bind())


def _has_table(name: str) -> bool:
    return _insp().has_table(name)


def _get_indexes(table: str) -> set[str]:
    return {str(i.get("name") or "") for i in _insp().get_indexes(table)}


def _create_index(name: str, table: str, cols: list[str], unique: bool = False) -> None:
    if not _is_offline() and name in _get_indexes(table):
        return
    op.create_index(name, table, cols, unique=unique)


def upgrade() -> None:
    _upgrade_create_tables()
    _upgrade_create_indexes()


def _upgrade_create_tables() -> None:
    if _is_offline() or not _has_table("companies"):
        op.create_table(
            "companies",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.String(length=256), server_default="", nullable=False),
        )

    if _is_offline() or not _has_table("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("email", sa.String(length=320), nullable=False),
            sa.Column("name", sa.String(length=256), server_default="", nullable=False),
            sa.Column("role", sa.String(length=32), server_default="CANDIDATE", nullable=False),
            sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=True),
        )

    if _is_offline() or not _has_table("jobs"):
        op.create_table(
            "jobs",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("title", sa.String(length=256), server_default="", nullable=False),
            sa.Column("status", sa.String(length=16), server_default="OPEN", nullable=False),
            sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=True),
        )

    if _is_offline() or not _has_table("applications"):
        op.create_table(
            "applications",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("job_id", sa.Integer(), sa.ForeignKey("jobs.id"), nullable=False),
            sa.Column("candidate_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("stage", sa.String(length=16), server_default="APPLIED", nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
            sa.UniqueConstraint("job_id", "candidate_id", name="uq_applications_job_candidate"),
        )

    if _is_offline() or not _has_table("application_history"):
        op.create_table(
            "application_history",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("application_id", sa.Integer(), sa.ForeignKey("applications.id"), nullable=False),
            sa.Column("from_stage", sa.String(length=16), nullable=False),
            sa.Column("to_stage", sa.String(length=16), nullable=False),
            sa.Column("changed_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
        )


def _upgrade_create_indexes() -> None:
    _create_index("ix_users_email", "users", ["email"], unique=True)
    _create_index("ix_users_role", "users", ["role"])
    _create_index("ix_users_company_id", "users", ["company_id"])

    _create_index("ix_jobs_status", "jobs", ["status"])
    _create_index("ix_jobs_company_id", "jobs", ["company_id"])

    _create_index("ix_applications_job_id", "applications", ["job_id"])
    _create_index("ix_applications_candidate_id", "applications", ["candidate_id"])
    _create_index("ix_applications_stage", "applications", ["stage"])

    _create_index("ix_application_history_application_id", "application_history", ["application_id"])
    _create_index("ix_application_history_changed_by_id", "application_history", ["changed_by_id"])
    _create_index("ix_application_history_changed_at", "application_history", ["changed_at"])


def downgrade() -> None:
    op.drop_table("application_history")
    op.drop_table("applications")
    op.drop_table("jobs")
    op.drop_table("users")
    op.drop_table("companies")
