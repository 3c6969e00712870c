from fastapi import APIRouter, Depends
from g4g.database.supabase_client import get_supabase
from g4g.modules.briefings.schemas import BriefingCreate, BriefingUpdate, BriefingResponse
from g4g.modules.briefings.service import BriefingService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/briefings", tags=["briefings"])


def get_briefing_service(supabase: Client = Depends(get_supabase)) -> BriefingService:
    return BriefingService(supabase)


@router.get("/active", response_model=Optional[BriefingResponse])
async def get_active_briefing(
    profile: Dict = Depends(require_permission("briefings:read")),
    service: BriefingService = Depends(get_briefing_service)
):
    """Today's briefing for the dashboard"""
    return service.get_active()


@router.get("", response_model=List[BriefingResponse])
async def list_briefings(
    profile: Dict = Depends(require_permission("briefings:update")),
    service: BriefingService = Depends(get_briefing_service)
):
    return service.list_briefings()


@router.post("", response_model=BriefingResponse, status_code=201)
async def create_briefing(
    briefing: BriefingCreate,
    profile: Dict = Depends(require_permission("briefings:create")),
    service: BriefingService = Depends(get_briefing_service)
):
    return service.create_briefing(briefing, profile["id"])


@router.put("/{briefing_id}", response_model=BriefingResponse)
async def update_briefing(
    briefing_id: str,
    briefing: BriefingUpdate,
    profile: Dict = Depends(require_permission("briefings:update")),
    service: BriefingService = Depends(get_briefing_service)
):
    return service.update_briefing(briefing_id, briefing)


@router.delete("/{briefing_id}", status_code=204)
async def delete_briefing(
    briefing_id: str,
    profile: Dict = Depends(require_permission("briefings:delete")),
    service: BriefingService = Depends(get_briefing_service)
):
    service.delete_briefing(briefing_id)
    return None
