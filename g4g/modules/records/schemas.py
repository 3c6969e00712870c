from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Literal
import datetime as dt

RecordType = Literal["weight", "reps", "time"]

DEFAULT_UNITS = {
    "weight": "lbs",
    "reps": "reps",
    "time": "seconds",
}


def _not_in_future(v: Optional[dt.date]) -> Optional[dt.date]:
    if v is not None and v > dt.date.today():
        raise ValueError("achieved_at cannot be in the future")
    return v


class RecordCreate(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=100)
    record_type: RecordType = "weight"
    value: float = Field(..., gt=0, le=100000)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    notes: Optional[str] = Field(None, max_length=500)
    achieved_at: Optional[dt.date] = None

    @field_validator("exercise_name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("notes")
    @classmethod
    def blank_notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("achieved_at")
    @classmethod
    def check_achieved_at(cls, v):
        return _not_in_future(v)

    @model_validator(mode="after")
    def default_unit(self):
        if not self.unit:
            self.unit = DEFAULT_UNITS[self.record_type]
        return self


class RecordUpdate(BaseModel):
    exercise_name: Optional[str] = Field(None, min_length=1, max_length=100)
    record_type: Optional[RecordType] = None
    value: Optional[float] = Field(None, gt=0, le=100000)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    notes: Optional[str] = Field(None, max_length=500)
    achieved_at: Optional[dt.date] = None

    @field_validator("exercise_name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("achieved_at")
    @classmethod
    def check_achieved_at(cls, v):
        return _not_in_future(v)


class RecordResponse(BaseModel):
    id: str
    user_id: str
    exercise_name: str
    record_type: str
    value: float
    unit: str
    notes: Optional[str] = None
    achieved_at: dt.date
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class ExerciseRecords(BaseModel):
    exercise_name: str
    best: RecordResponse
    history: List[RecordResponse]
