from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.meal_plans.schemas import (
    MealAssign, MealPlanResponse, DayPlan, MacroTargets, DailyMacrosResponse,
    TemplateCreate, TemplateResponse, ShoppingListCreate, ShoppingListResponse,
    DeletedCount
)
from g4g.modules.meal_plans.service import MealPlanService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional
from datetime import date

router = APIRouter(prefix="/meal-plans", tags=["meal-plans"])


def get_meal_plan_service(supabase: Client = Depends(get_supabase)) -> MealPlanService:
    return MealPlanService(supabase)


@router.get("/week", response_model=List[MealPlanResponse])
async def get_week(
    start: date,
    profile: Dict = Depends(require_permission("meal_plans:read")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    """Seven days of meal plans starting at start"""
    return service.get_week(profile["id"], start)


@router.delete("/week", response_model=DeletedCount)
async def clear_week(
    start: date,
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return DeletedCount(deleted=service.clear_week(profile["id"], start))


@router.get("/upcoming", response_model=List[MealPlanResponse])
async def get_upcoming(
    profile: Dict = Depends(require_permission("meal_plans:read")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.get_upcoming(profile["id"])


@router.get("/day/{day}", response_model=DayPlan)
async def get_day(
    day: date,
    profile: Dict = Depends(require_permission("meal_plans:read")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.get_day(profile["id"], day)


@router.delete("/day/{day}", response_model=DeletedCount)
async def remove_meals(
    day: date,
    meal_number: Optional[int] = Query(None, ge=1, le=6),
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    """Remove one meal slot, or the whole day without meal_number"""
    return DeletedCount(deleted=service.remove_meals(profile["id"], day, meal_number))


@router.put("/assign", response_model=MealPlanResponse)
async def assign_meal(
    assignment: MealAssign,
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.assign_meal(profile["id"], assignment)


@router.get("/macros/{day}", response_model=DailyMacrosResponse)
async def get_daily_macros(
    day: date,
    profile: Dict = Depends(require_permission("meal_plans:read")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.get_daily_macros(profile["id"], day)


@router.put("/macros/{day}", response_model=DailyMacrosResponse)
async def set_macro_targets(
    day: date,
    targets: MacroTargets,
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.set_macro_targets(profile["id"], day, targets)


@router.get("/templates", response_model=List[TemplateResponse])
async def list_templates(
    profile: Dict = Depends(require_permission("meal_plans:read")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.list_templates(profile["id"])


@router.post("/templates", response_model=TemplateResponse, status_code=201)
async def create_template(
    template: TemplateCreate,
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.create_template(profile["id"], template)


@router.post("/templates/{template_id}/apply", response_model=List[MealPlanResponse])
async def apply_template(
    template_id: str,
    start: date,
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.apply_template(profile["id"], template_id, start)


@router.post("/shopping-lists", response_model=ShoppingListResponse, status_code=201)
async def generate_shopping_list(
    request: ShoppingListCreate,
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.generate_shopping_list(profile["id"], request)


@router.get("/shopping-lists", response_model=List[ShoppingListResponse])
async def list_shopping_lists(
    profile: Dict = Depends(require_permission("meal_plans:read")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.list_shopping_lists(profile["id"])


@router.delete("/shopping-lists/{list_id}", status_code=204)
async def delete_shopping_list(
    list_id: str,
    profile: Dict = Depends(require_permission("meal_plans:update")),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    service.delete_shopping_list(profile["id"], list_id)
    return None
