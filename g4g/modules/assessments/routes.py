from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.assessments.schemas import ZeroDayTestSubmit, ZeroDayTestResponse, ZeroDayResult
from g4g.modules.assessments.service import AssessmentService
from g4g.core.dependencies import require_permission
from g4g.core.tiers import get_all_tiers
from supabase import Client
from typing import Dict, List, Optional

router = APIRouter(prefix="/assessments", tags=["assessments"])


def get_assessment_service(supabase: Client = Depends(get_supabase)) -> AssessmentService:
    return AssessmentService(supabase)


@router.get("/tiers", response_model=List[dict])
async def list_tiers():
    """Tier brackets and their pushup thresholds"""
    return get_all_tiers()


@router.post("/zero-day", response_model=ZeroDayResult, status_code=201)
async def submit_zero_day(
    test: ZeroDayTestSubmit,
    profile: Dict = Depends(require_permission("profiles:update")),
    service: AssessmentService = Depends(get_assessment_service)
):
    """Submit the Zero Day fitness test; pushups decide the tier"""
    return service.submit_zero_day(profile, test)


@router.get("/zero-day/latest", response_model=Optional[ZeroDayTestResponse])
async def get_latest_zero_day(
    profile: Dict = Depends(require_permission("profiles:read")),
    service: AssessmentService = Depends(get_assessment_service)
):
    return service.get_latest(profile["id"])


@router.get("/zero-day/history", response_model=List[ZeroDayTestResponse])
async def get_zero_day_history(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    profile: Dict = Depends(require_permission("profiles:read")),
    service: AssessmentService = Depends(get_assessment_service)
):
    return service.list_history(profile["id"], limit=limit, offset=offset)
