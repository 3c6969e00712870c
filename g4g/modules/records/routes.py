from fastapi import APIRouter, Depends
from g4g.database.supabase_client import get_supabase
from g4g.modules.records.schemas import RecordCreate, RecordUpdate, RecordResponse, ExerciseRecords
from g4g.modules.records.service import RecordService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/records", tags=["records"])


def get_record_service(supabase: Client = Depends(get_supabase)) -> RecordService:
    return RecordService(supabase)


@router.get("", response_model=List[RecordResponse])
async def list_records(
    profile: Dict = Depends(require_permission("records:read")),
    service: RecordService = Depends(get_record_service)
):
    """The caller's personal records, most recent first"""
    return service.list_records(profile["id"])


@router.get("/best", response_model=List[ExerciseRecords])
async def list_best_records(
    profile: Dict = Depends(require_permission("records:read")),
    service: RecordService = Depends(get_record_service)
):
    return service.list_best(profile["id"])


@router.post("", response_model=RecordResponse, status_code=201)
async def create_record(
    record: RecordCreate,
    profile: Dict = Depends(require_permission("records:create")),
    service: RecordService = Depends(get_record_service)
):
    return service.create_record(profile["id"], record)


@router.put("/{record_id}", response_model=RecordResponse)
async def update_record(
    record_id: str,
    record: RecordUpdate,
    profile: Dict = Depends(require_permission("records:update")),
    service: RecordService = Depends(get_record_service)
):
    return service.update_record(profile["id"], record_id, record)


@router.delete("/{record_id}", status_code=204)
async def delete_record(
    record_id: str,
    profile: Dict = Depends(require_permission("records:delete")),
    service: RecordService = Depends(get_record_service)
):
    service.delete_record(profile["id"], record_id)
    return None
