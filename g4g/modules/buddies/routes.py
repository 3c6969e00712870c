from fastapi import APIRouter, Depends
from g4g.database.supabase_client import get_supabase
from g4g.modules.buddies.schemas import (
    BuddyRequestCreate, BuddyRequestResponse, BuddyResponse, BuddyCount, NudgeResponse
)
from g4g.modules.buddies.service import BuddyService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/buddies", tags=["buddies"])


def get_buddy_service(supabase: Client = Depends(get_supabase)) -> BuddyService:
    return BuddyService(supabase)


@router.get("", response_model=List[BuddyResponse])
async def list_buddies(
    profile: Dict = Depends(require_permission("buddies:read")),
    service: BuddyService = Depends(get_buddy_service)
):
    """Accepted buddies, flagged inactive when they have not been active recently"""
    return service.list_buddies(profile["id"])


@router.get("/count", response_model=BuddyCount)
async def count_buddies(
    profile: Dict = Depends(require_permission("buddies:read")),
    service: BuddyService = Depends(get_buddy_service)
):
    return BuddyCount(count=service.count_buddies(profile["id"]))


@router.post("/requests", response_model=BuddyRequestResponse, status_code=201)
async def send_buddy_request(
    request: BuddyRequestCreate,
    profile: Dict = Depends(require_permission("buddies:request")),
    service: BuddyService = Depends(get_buddy_service)
):
    return service.send_request(profile["id"], request)


@router.get("/requests/incoming", response_model=List[BuddyRequestResponse])
async def list_incoming_requests(
    profile: Dict = Depends(require_permission("buddies:read")),
    service: BuddyService = Depends(get_buddy_service)
):
    return service.list_incoming(profile["id"])


@router.get("/requests/outgoing", response_model=List[BuddyRequestResponse])
async def list_outgoing_requests(
    profile: Dict = Depends(require_permission("buddies:read")),
    service: BuddyService = Depends(get_buddy_service)
):
    return service.list_outgoing(profile["id"])


@router.post("/requests/{request_id}/accept", response_model=BuddyRequestResponse)
async def accept_buddy_request(
    request_id: str,
    profile: Dict = Depends(require_permission("buddies:request")),
    service: BuddyService = Depends(get_buddy_service)
):
    return service.accept_request(profile["id"], request_id)


@router.delete("/requests/{request_id}", status_code=204)
async def reject_buddy_request(
    request_id: str,
    profile: Dict = Depends(require_permission("buddies:request")),
    service: BuddyService = Depends(get_buddy_service)
):
    """Reject an incoming request or cancel one you sent"""
    service.reject_request(profile["id"], request_id)
    return None


@router.post("/{other_user_id}/nudge", response_model=NudgeResponse, status_code=201)
async def nudge_buddy(
    other_user_id: str,
    profile: Dict = Depends(require_permission("buddies:request")),
    service: BuddyService = Depends(get_buddy_service)
):
    return service.nudge(profile, other_user_id)


@router.delete("/{other_user_id}", status_code=204)
async def remove_buddy(
    other_user_id: str,
    profile: Dict = Depends(require_permission("buddies:request")),
    service: BuddyService = Depends(get_buddy_service)
):
    service.remove_buddy(profile["id"], other_user_id)
    return None
