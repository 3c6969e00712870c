import logging
from supabase import Client
from g4g.modules.recipes.schemas import RecipeCreate, RecipeUpdate, RecipeResponse, MacroFilter
from g4g.core.tiers import has_tier_access
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

MACRO_COLUMNS = ("calories", "protein", "carbs", "fat")


class RecipeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_recipe(self, recipe_data: RecipeCreate, user_id: str) -> RecipeResponse:
        """Create a recipe (coach/admin)"""
        try:
            payload = recipe_data.model_dump(mode="json")
            payload["created_by"] = user_id
            result = self.supabase.table("recipes").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create recipe")

            logger.info(f"Recipe {result.data[0]['id']} created by {user_id}")
            return RecipeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating recipe: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_recipe_by_id(self, recipe_id: str) -> RecipeResponse:
        try:
            result = self.supabase.table("recipes")\
                .select("*")\
                .eq("id", recipe_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Recipe not found")

            return RecipeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching recipe {recipe_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_accessible_recipe(self, recipe_id: str, profile: dict) -> RecipeResponse:
        recipe = self.get_recipe_by_id(recipe_id)
        if recipe.min_tier and not has_tier_access(profile, recipe.min_tier):
            raise HTTPException(status_code=403, detail=f"Recipe requires tier {recipe.min_tier}")
        return recipe

    def get_recipes_by_ids(self, recipe_ids: List[str]) -> List[RecipeResponse]:
        if not recipe_ids:
            return []
        try:
            result = self.supabase.table("recipes")\
                .select("*")\
                .in_("id", list(set(recipe_ids)))\
                .execute()
            return [RecipeResponse(**r) for r in result.data]
        except Exception as e:
            logger.error(f"Error fetching recipes by id: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_recipes(self, limit: int = 20, offset: int = 0) -> List[RecipeResponse]:
        """Recipes newest first"""
        try:
            result = self.supabase.table("recipes")\
                .select("*")\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [RecipeResponse(**r) for r in result.data]
        except Exception as e:
            logger.error(f"Error listing recipes: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def search_recipes(self, term: str, limit: int = 20) -> List[RecipeResponse]:
        """Case-insensitive title search"""
        if not term or not term.strip():
            return []
        try:
            result = self.supabase.table("recipes")\
                .select("*")\
                .ilike("title", f"%{term.strip()}%")\
                .order("title")\
                .limit(limit)\
                .execute()
            return [RecipeResponse(**r) for r in result.data]
        except Exception as e:
            logger.error(f"Error searching recipes for '{term}': {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def filter_by_macros(self, filters: MacroFilter, limit: int = 20) -> List[RecipeResponse]:
        """Recipes inside the given macro bounds; unset bounds are ignored"""
        try:
            query = self.supabase.table("recipes").select("*")
            for column in MACRO_COLUMNS:
                low = getattr(filters, f"min_{column}")
                high = getattr(filters, f"max_{column}")
                if low is not None:
                    query = query.gte(column, low)
                if high is not None:
                    query = query.lte(column, high)
            result = query.order("calories").limit(limit).execute()
            return [RecipeResponse(**r) for r in result.data]
        except Exception as e:
            logger.error(f"Error filtering recipes: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_high_protein(self, min_protein: float = 30, limit: int = 20) -> List[RecipeResponse]:
        try:
            result = self.supabase.table("recipes")\
                .select("*")\
                .gte("protein", min_protein)\
                .order("protein", desc=True)\
                .limit(limit)\
                .execute()
            return [RecipeResponse(**r) for r in result.data]
        except Exception as e:
            logger.error(f"Error fetching high-protein recipes: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def count_recipes(self) -> int:
        try:
            result = self.supabase.table("recipes")\
                .select("id", count="exact")\
                .execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"Error counting recipes: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_recipe(self, recipe_id: str, recipe_data: RecipeUpdate) -> RecipeResponse:
        try:
            update_data = recipe_data.model_dump(mode="json", exclude_unset=True)
            if not update_data:
                return self.get_recipe_by_id(recipe_id)

            result = self.supabase.table("recipes")\
                .update(update_data)\
                .eq("id", recipe_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Recipe not found")

            return RecipeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating recipe {recipe_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_recipe(self, recipe_id: str) -> bool:
        try:
            result = self.supabase.table("recipes")\
                .delete()\
                .eq("id", recipe_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Recipe not found")
            logger.info(f"Recipe {recipe_id} deleted")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting recipe {recipe_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
