import logging
from datetime import date
from supabase import Client
from g4g.modules.featured_meals.schemas import FeaturedMealResponse
from g4g.modules.recipes.schemas import RecipeResponse
from g4g.core.dates import today, next_days_window
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

UPCOMING_DAYS = 7


class FeaturedMealService:
    """Meal of the Day. Open to every member, tier locks on the recipe do not apply."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _with_recipes(self, rows: List[dict]) -> List[FeaturedMealResponse]:
        recipes = {}
        if rows:
            result = self.supabase.table("recipes")\
                .select("*")\
                .in_("id", list({r["recipe_id"] for r in rows}))\
                .execute()
            recipes = {r["id"]: RecipeResponse(**r) for r in result.data}
        return [FeaturedMealResponse(**r, recipe=recipes.get(r["recipe_id"])) for r in rows]

    def get_for_date(self, day: date) -> Optional[FeaturedMealResponse]:
        try:
            result = self.supabase.table("featured_meals")\
                .select("*")\
                .eq("featured_date", day.isoformat())\
                .limit(1)\
                .execute()
            meals = self._with_recipes(result.data)
            return meals[0] if meals else None
        except Exception as e:
            logger.error(f"Error fetching featured meal for {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_today(self) -> Optional[FeaturedMealResponse]:
        return self.get_for_date(today())

    def list_upcoming(self) -> List[FeaturedMealResponse]:
        """Featured meals from today through the next week, soonest first"""
        start, end = next_days_window(UPCOMING_DAYS)
        try:
            result = self.supabase.table("featured_meals")\
                .select("*")\
                .gte("featured_date", start)\
                .lte("featured_date", end)\
                .order("featured_date")\
                .execute()
            return self._with_recipes(result.data)
        except Exception as e:
            logger.error(f"Error fetching upcoming featured meals: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def set_for_date(self, day: date, recipe_id: str, user_id: str) -> FeaturedMealResponse:
        """Feature a recipe on a date, replacing whatever was featured there"""
        try:
            recipe = self.supabase.table("recipes")\
                .select("*")\
                .eq("id", recipe_id)\
                .limit(1)\
                .execute()
            if not recipe.data:
                raise HTTPException(status_code=404, detail="Recipe not found")

            result = self.supabase.table("featured_meals")\
                .upsert({
                    "recipe_id": recipe_id,
                    "featured_date": day.isoformat(),
                    "created_by": user_id,
                }, on_conflict="featured_date")\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to set featured meal")

            logger.info(f"Recipe {recipe_id} featured on {day} by {user_id}")
            return FeaturedMealResponse(**result.data[0], recipe=RecipeResponse(**recipe.data[0]))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error setting featured meal for {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def clear_for_date(self, day: date) -> bool:
        try:
            result = self.supabase.table("featured_meals")\
                .delete()\
                .eq("featured_date", day.isoformat())\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="No featured meal on this date")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error clearing featured meal for {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
