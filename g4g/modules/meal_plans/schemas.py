import datetime as dt
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict
from g4g.modules.recipes.schemas import RecipeResponse, Ingredient

MEAL_LABELS: Dict[int, Dict[str, str]] = {
    1: {"name": "Breakfast", "time": "6:00-8:00 AM"},
    2: {"name": "Lunch", "time": "12:00-2:00 PM"},
    3: {"name": "Dinner", "time": "6:00-8:00 PM"},
    4: {"name": "Snack 1", "time": "10:00 AM"},
    5: {"name": "Snack 2", "time": "3:00 PM"},
    6: {"name": "Snack 3", "time": "9:00 PM"},
}


class MealAssign(BaseModel):
    recipe_id: str
    date: dt.date
    meal_number: int = Field(..., ge=1, le=6)


class MealPlanResponse(BaseModel):
    id: str
    user_id: str
    recipe_id: str
    assigned_date: dt.date
    meal_number: int
    created_at: Optional[dt.datetime] = None
    recipe: Optional[RecipeResponse] = None

    class Config:
        from_attributes = True


class MealSlot(BaseModel):
    meal_number: int
    label: str
    time: str
    plan: Optional[MealPlanResponse] = None


class DayPlan(BaseModel):
    date: dt.date
    slots: List[MealSlot]


class MacroTargets(BaseModel):
    calories: Optional[float] = Field(None, ge=0, le=10000)
    protein: Optional[float] = Field(None, ge=0, le=1000)
    carbs: Optional[float] = Field(None, ge=0, le=1000)
    fat: Optional[float] = Field(None, ge=0, le=500)


class PlannedMacros(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class DailyMacrosResponse(BaseModel):
    date: dt.date
    targets: MacroTargets
    planned: PlannedMacros


class TemplateMealIn(BaseModel):
    recipe_id: str
    day_offset: int = Field(..., ge=0, le=6)
    meal_number: int = Field(..., ge=1, le=6)


class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    is_public: bool = False
    meals: List[TemplateMealIn] = Field(..., min_length=1, max_length=42)

    @model_validator(mode="after")
    def check_unique_slots(self):
        seen = set()
        for meal in self.meals:
            slot = (meal.day_offset, meal.meal_number)
            if slot in seen:
                raise ValueError(f"Duplicate meal slot: day {slot[0]}, meal {slot[1]}")
            seen.add(slot)
        return self


class TemplateMealResponse(BaseModel):
    id: Optional[str] = None
    recipe_id: str
    day_offset: int
    meal_number: int


class TemplateResponse(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    is_public: bool = False
    created_at: Optional[dt.datetime] = None
    meals: List[TemplateMealResponse] = []

    class Config:
        from_attributes = True


class ShoppingListCreate(BaseModel):
    start_date: dt.date
    end_date: dt.date

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class ShoppingListResponse(BaseModel):
    id: str
    user_id: str
    start_date: dt.date
    end_date: dt.date
    ingredients: List[Ingredient] = []
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class DeletedCount(BaseModel):
    deleted: int

