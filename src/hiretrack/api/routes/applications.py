"""
Applications API Route

Candidates apply to jobs; recruiters and hiring managers move applications
through the pipeline. Business rules live in ApplicationLifecycleEngine.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from hiretrack.api.deps import get_engine, get_identity, require_roles
from hiretrack.application.services import ApplicationLifecycleEngine
from hiretrack.core.errors import AuthorizationError
from hiretrack.domain.application import Role
from hiretrack.infrastructure.auth import Identity

router = APIRouter()

STAGE_EDITORS = (Role.RECRUITER, Role.HIRING_MANAGER)


class ApplyRequest(BaseModel):
    job_id: int = Field(..., gt=0, description="Job to apply for")


class StageChangeRequest(BaseModel):
    stage: str = Field(..., min_length=1, description="Target stage, e.g. SCREENING (case-insensitive)")


class NextStagesResponse(BaseModel):
    application_id: int
    stage: str
    next_stages: List[str]


@router.post("/applications", status_code=201)
async def submit_application(
    req: ApplyRequest,
    identity: Identity = Depends(require_roles(Role.CANDIDATE)),
    engine: ApplicationLifecycleEngine = Depends(get_engine),
) -> Dict[str, Any]:
    outcome = await engine.submit_application(req.job_id, identity.user_id)
    return outcome.to_dict()


@router.patch("/applications/{application_id}/stage")
async def change_application_stage(
    application_id: int,
    req: StageChangeRequest,
    identity: Identity = Depends(require_roles(*STAGE_EDITORS)),
    engine: ApplicationLifecycleEngine = Depends(get_engine),
) -> Dict[str, Any]:
    outcome = await engine.change_stage(application_id, req.stage, identity.user_id)
    return outcome.to_dict()


def _ensure_can_view(identity: Identity, candidate_id: int) -> None:
    if identity.role == Role.CANDIDATE and identity.user_id != candidate_id:
        raise AuthorizationError(message="Candidates can only view their own applications")


@router.get("/applications/{application_id}/next-stages", response_model=NextStagesResponse)
def get_next_stages(
    application_id: int,
    identity: Identity = Depends(get_identity),
    engine: ApplicationLifecycleEngine = Depends(get_engine),
):
    application = engine.get_application(application_id)
    _ensure_can_view(identity, application.candidate_id)
    return NextStagesResponse(
        application_id=application_id,
        stage=application.stage.value,
        next_stages=sorted(s.value for s in engine.get_valid_next_stages(application_id)),
    )


@router.get("/applications/{application_id}/history")
def get_application_history(
    application_id: int,
    identity: Identity = Depends(get_identity),
    engine: ApplicationLifecycleEngine = Depends(get_engine),
) -> Dict[str, Any]:
    application = engine.get_application(application_id)
    _ensure_can_view(identity, application.candidate_id)
    return {
        "application": application.to_dict(),
        "history": [e.to_dict() for e in engine.get_history(application_id)],
    }
