from fastapi import APIRouter, Depends, Query
from g4g.database.supabase_client import get_supabase
from g4g.modules.recipes.schemas import (
    RecipeCreate, RecipeUpdate, RecipeResponse, MacroFilter, RecipeCount
)
from g4g.modules.recipes.service import RecipeService
from g4g.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/recipes", tags=["recipes"])


def get_recipe_service(supabase: Client = Depends(get_supabase)) -> RecipeService:
    return RecipeService(supabase)


@router.post("", response_model=RecipeResponse, status_code=201)
async def create_recipe(
    recipe_data: RecipeCreate,
    profile: Dict = Depends(require_permission("recipes:create")),
    service: RecipeService = Depends(get_recipe_service)
):
    return service.create_recipe(recipe_data, profile["id"])


@router.get("", response_model=List[RecipeResponse])
async def list_recipes(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    profile: Dict = Depends(require_permission("recipes:read")),
    service: RecipeService = Depends(get_recipe_service)
):
    return service.list_recipes(limit=limit, offset=offset)


@router.get("/search", response_model=List[RecipeResponse])
async def search_recipes(
    q: str = Query("", max_length=100),
    limit: int = Query(20, ge=1, le=100),
    profile: Dict = Depends(require_permission("recipes:read")),
    service: RecipeService = Depends(get_recipe_service)
):
    return service.search_recipes(q, limit=limit)


@router.get("/filter", response_model=List[RecipeResponse])
async def filter_recipes(
    filters: MacroFilter = Depends(),
    limit: int = Query(20, ge=1, le=100),
    profile: Dict = Depends(require_permission("recipes:read")),
    service: RecipeService = Depends(get_recipe_service)
):
    """Filter by calorie and macro ranges"""
    return service.filter_by_macros(filters, limit=limit)


@router.get("/high-protein", response_model=List[RecipeResponse])
async def high_protein_recipes(
    min_protein: float = Query(30, ge=0),
    limit: int = Query(20, ge=1, le=100),
    profile: Dict = Depends(require_permission("recipes:read")),
    service: RecipeService = Depends(get_recipe_service)
):
    return service.list_high_protein(min_protein=min_protein, limit=limit)


@router.get("/count", response_model=RecipeCount)
async def count_recipes(
    profile: Dict = Depends(require_permission("recipes:read")),
    service: RecipeService = Depends(get_recipe_service)
):
    return RecipeCount(count=service.count_recipes())


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: str,
    profile: Dict = Depends(require_permission("recipes:read")),
    service: RecipeService = Depends(get_recipe_service)
):
    return service.get_accessible_recipe(recipe_id, profile)


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: str,
    recipe_data: RecipeUpdate,
    profile: Dict = Depends(require_permission("recipes:update")),
    service: RecipeService = Depends(get_recipe_service)
):
    return service.update_recipe(recipe_id, recipe_data)


@router.delete("/{recipe_id}", status_code=204)
async def delete_recipe(
    recipe_id: str,
    profile: Dict = Depends(require_permission("recipes:delete")),
    service: RecipeService = Depends(get_recipe_service)
):
    service.delete_recipe(recipe_id)
    return None
