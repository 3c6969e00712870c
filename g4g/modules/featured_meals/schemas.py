from pydantic import BaseModel
from typing import Optional
import datetime as dt
from g4g.modules.recipes.schemas import RecipeResponse


class FeaturedMealSet(BaseModel):
    recipe_id: str


class FeaturedMealResponse(BaseModel):
    id: str
    recipe_id: str
    featured_date: dt.date
    created_by: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    recipe: Optional[RecipeResponse] = None

    class Config:
        from_attributes = True
