import logging
from supabase import Client
from g4g.modules.records.schemas import RecordCreate, RecordUpdate, RecordResponse, ExerciseRecords
from g4g.core.dates import today, utcnow_iso
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def group_by_exercise(records: List[RecordResponse]) -> List[ExerciseRecords]:
    """
    Group records per exercise with the highest value first.
    Exercises are ordered by name.
    """
    groups = {}
    for record in records:
        groups.setdefault(record.exercise_name, []).append(record)
    result = []
    for name in sorted(groups, key=str.lower):
        history = sorted(groups[name], key=lambda r: r.value, reverse=True)
        result.append(ExerciseRecords(exercise_name=name, best=history[0], history=history))
    return result


class RecordService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_records(self, user_id: str) -> List[RecordResponse]:
        try:
            result = self.supabase.table("personal_records")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("achieved_at", desc=True)\
                .execute()
            return [RecordResponse(**r) for r in result.data]
        except Exception as e:
            logger.error(f"Error fetching personal records for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_best(self, user_id: str) -> List[ExerciseRecords]:
        return group_by_exercise(self.list_records(user_id))

    def create_record(self, user_id: str, record: RecordCreate) -> RecordResponse:
        try:
            result = self.supabase.table("personal_records").insert({
                "user_id": user_id,
                "exercise_name": record.exercise_name,
                "record_type": record.record_type,
                "value": record.value,
                "unit": record.unit,
                "notes": record.notes,
                "achieved_at": (record.achieved_at or today()).isoformat(),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save record")

            logger.info(f"PR logged for {user_id}: {record.exercise_name} {record.value} {record.unit}")
            return RecordResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving personal record for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_record(self, user_id: str, record_id: str, record: RecordUpdate) -> RecordResponse:
        try:
            update_data = record.model_dump(exclude_none=True)
            if "achieved_at" in update_data:
                update_data["achieved_at"] = update_data["achieved_at"].isoformat()
            update_data["updated_at"] = utcnow_iso()

            result = self.supabase.table("personal_records")\
                .update(update_data)\
                .eq("id", record_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Record not found")

            return RecordResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating personal record {record_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_record(self, user_id: str, record_id: str) -> bool:
        try:
            result = self.supabase.table("personal_records")\
                .delete()\
                .eq("id", record_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Record not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting personal record {record_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
