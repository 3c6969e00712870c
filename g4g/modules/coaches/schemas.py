from pydantic import BaseModel, Field, model_validator
from typing import Optional, List


class CoachDirectoryEntry(BaseModel):
    id: str
    display_name: str
    bio: Optional[str] = None
    specialties: List[str] = []
    certifications: Optional[str] = None
    years_experience: Optional[int] = None
    avatar_url: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_miles: Optional[float] = None


class CoachProfileUpdate(BaseModel):
    bio: Optional[str] = Field(None, max_length=1000)
    specialties: Optional[str] = Field(None, max_length=500)
    certifications: Optional[str] = Field(None, max_length=500)
    years_experience: Optional[int] = Field(None, ge=0, le=80)
    location: Optional[str] = Field(None, max_length=200)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    is_public: Optional[bool] = None

    @model_validator(mode="after")
    def check_coordinates(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self
