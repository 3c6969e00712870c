from datetime import date
from fastapi import APIRouter, Depends
from g4g.database.supabase_client import get_supabase
from g4g.modules.featured_meals.schemas import FeaturedMealSet, FeaturedMealResponse
from g4g.modules.featured_meals.service import FeaturedMealService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/featured-meals", tags=["featured-meals"])


def get_featured_meal_service(supabase: Client = Depends(get_supabase)) -> FeaturedMealService:
    return FeaturedMealService(supabase)


@router.get("/today", response_model=Optional[FeaturedMealResponse])
async def get_todays_featured_meal(
    profile: Dict = Depends(require_permission("featured_meals:read")),
    service: FeaturedMealService = Depends(get_featured_meal_service)
):
    """Meal of the Day, null when nothing is featured"""
    return service.get_today()


@router.get("/upcoming", response_model=List[FeaturedMealResponse])
async def get_upcoming_featured_meals(
    profile: Dict = Depends(require_permission("featured_meals:read")),
    service: FeaturedMealService = Depends(get_featured_meal_service)
):
    return service.list_upcoming()


@router.get("/{day}", response_model=Optional[FeaturedMealResponse])
async def get_featured_meal(
    day: date,
    profile: Dict = Depends(require_permission("featured_meals:read")),
    service: FeaturedMealService = Depends(get_featured_meal_service)
):
    return service.get_for_date(day)


@router.put("/{day}", response_model=FeaturedMealResponse)
async def set_featured_meal(
    day: date,
    featured: FeaturedMealSet,
    profile: Dict = Depends(require_permission("featured_meals:manage")),
    service: FeaturedMealService = Depends(get_featured_meal_service)
):
    return service.set_for_date(day, featured.recipe_id, profile["id"])


@router.delete("/{day}", status_code=204)
async def clear_featured_meal(
    day: date,
    profile: Dict = Depends(require_permission("featured_meals:manage")),
    service: FeaturedMealService = Depends(get_featured_meal_service)
):
    service.clear_for_date(day)
    return None
