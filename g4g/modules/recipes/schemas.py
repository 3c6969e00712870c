from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime

Tier = Literal[".223", ".556", ".762", ".50 Cal"]


class Ingredient(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None


class RecipeCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    calories: int = Field(..., ge=0, le=5000)
    protein: float = Field(..., ge=0, le=500)
    carbs: float = Field(..., ge=0, le=500)
    fat: float = Field(..., ge=0, le=200)
    ingredients: List[Ingredient] = Field(..., min_length=1, max_length=30)
    instructions: List[str] = Field(..., min_length=1, max_length=20)
    prep_time_minutes: Optional[int] = Field(None, ge=1, le=480)
    servings: Optional[int] = Field(None, ge=1, le=20)
    image_url: Optional[str] = None
    min_tier: Optional[Tier] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return v.strip()

    @field_validator("instructions")
    @classmethod
    def no_blank_steps(cls, v: List[str]) -> List[str]:
        steps = [s.strip() for s in v]
        if any(not s for s in steps):
            raise ValueError("Instruction cannot be empty")
        return steps


class RecipeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    calories: Optional[int] = Field(None, ge=0, le=5000)
    protein: Optional[float] = Field(None, ge=0, le=500)
    carbs: Optional[float] = Field(None, ge=0, le=500)
    fat: Optional[float] = Field(None, ge=0, le=200)
    ingredients: Optional[List[Ingredient]] = Field(None, min_length=1, max_length=30)
    instructions: Optional[List[str]] = Field(None, min_length=1, max_length=20)
    prep_time_minutes: Optional[int] = Field(None, ge=1, le=480)
    servings: Optional[int] = Field(None, ge=1, le=20)
    image_url: Optional[str] = None
    min_tier: Optional[Tier] = None


class RecipeResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    calories: int = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    ingredients: List[Ingredient] = []
    instructions: List[str] = []
    prep_time_minutes: Optional[int] = None
    servings: Optional[int] = None
    image_url: Optional[str] = None
    min_tier: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MacroFilter(BaseModel):
    min_calories: Optional[float] = None
    max_calories: Optional[float] = None
    min_protein: Optional[float] = None
    max_protein: Optional[float] = None
    min_carbs: Optional[float] = None
    max_carbs: Optional[float] = None
    min_fat: Optional[float] = None
    max_fat: Optional[float] = None


class RecipeCount(BaseModel):
    count: int
