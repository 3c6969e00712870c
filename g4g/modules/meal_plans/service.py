import logging
from datetime import date, timedelta
from supabase import Client
from g4g.modules.meal_plans.schemas import (
    MEAL_LABELS, MealAssign, MealPlanResponse, MealSlot, DayPlan, MacroTargets,
    PlannedMacros, DailyMacrosResponse, TemplateCreate, TemplateResponse,
    TemplateMealResponse, ShoppingListCreate, ShoppingListResponse
)
from g4g.modules.recipes.schemas import RecipeResponse
from g4g.core.dates import today, week_window
from typing import Any, Dict, Iterable, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

MEAL_PLAN_CONFLICT = "user_id,assigned_date,meal_number"


def merge_ingredients(recipes: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Combine ingredients across recipes by lower-cased name, summing quantities.
    The first occurrence keeps its name and unit. Nameless entries are dropped.
    """
    merged: Dict[str, Dict[str, Any]] = {}
    for recipe in recipes:
        for ingredient in recipe.get("ingredients") or []:
            name = ingredient.get("name")
            if not name:
                continue
            key = name.lower()
            if key in merged:
                merged[key]["quantity"] = (merged[key].get("quantity") or 0) + (ingredient.get("quantity") or 0)
            else:
                merged[key] = dict(ingredient)
    return list(merged.values())


def sum_macros(recipes: Iterable[Dict[str, Any]]) -> PlannedMacros:
    totals = PlannedMacros()
    for recipe in recipes:
        totals.calories += recipe.get("calories") or 0
        totals.protein += recipe.get("protein") or 0
        totals.carbs += recipe.get("carbs") or 0
        totals.fat += recipe.get("fat") or 0
    return totals


class MealPlanService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _recipes_by_id(self, recipe_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        if not recipe_ids:
            return {}
        result = self.supabase.table("recipes")\
            .select("*")\
            .in_("id", list(set(recipe_ids)))\
            .execute()
        return {r["id"]: r for r in result.data}

    def _attach_recipes(self, plans: List[Dict[str, Any]]) -> List[MealPlanResponse]:
        recipes = self._recipes_by_id([p["recipe_id"] for p in plans])
        attached = []
        for plan in plans:
            recipe = recipes.get(plan["recipe_id"])
            attached.append(MealPlanResponse(
                **plan,
                recipe=RecipeResponse(**recipe) if recipe else None
            ))
        return attached

    def _plans_between(self, user_id: str, start: str, end: str) -> List[Dict[str, Any]]:
        result = self.supabase.table("meal_plans")\
            .select("*")\
            .eq("user_id", user_id)\
            .gte("assigned_date", start)\
            .lte("assigned_date", end)\
            .order("assigned_date")\
            .execute()
        return result.data

    def get_week(self, user_id: str, start: date) -> List[MealPlanResponse]:
        """Meal plans for the 7 days from start, each with its recipe"""
        try:
            week_start, week_end = week_window(start)
            plans = self._plans_between(user_id, week_start, week_end)
            return sorted(
                self._attach_recipes(plans),
                key=lambda p: (p.assigned_date, p.meal_number)
            )
        except Exception as e:
            logger.error(f"Error fetching meal plan week for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_day(self, user_id: str, day: date) -> DayPlan:
        """One day laid out by meal slot; empty slots have no plan"""
        try:
            plans = self._attach_recipes(self._plans_between(user_id, day.isoformat(), day.isoformat()))
            by_slot = {p.meal_number: p for p in plans}
            slots = [
                MealSlot(meal_number=n, label=label["name"], time=label["time"], plan=by_slot.get(n))
                for n, label in MEAL_LABELS.items()
            ]
            return DayPlan(date=day, slots=slots)
        except Exception as e:
            logger.error(f"Error fetching meal plan for {user_id} on {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_upcoming(self, user_id: str) -> List[MealPlanResponse]:
        return self.get_week(user_id, today())

    def assign_meal(self, user_id: str, assignment: MealAssign) -> MealPlanResponse:
        """Put a recipe in a slot, replacing whatever was there"""
        try:
            recipe = self.supabase.table("recipes")\
                .select("id")\
                .eq("id", assignment.recipe_id)\
                .limit(1)\
                .execute()
            if not recipe.data:
                raise HTTPException(status_code=404, detail="Recipe not found")

            result = self.supabase.table("meal_plans")\
                .upsert({
                    "user_id": user_id,
                    "recipe_id": assignment.recipe_id,
                    "assigned_date": assignment.date.isoformat(),
                    "meal_number": assignment.meal_number,
                }, on_conflict=MEAL_PLAN_CONFLICT)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to assign meal")

            logger.info(f"Meal {assignment.meal_number} on {assignment.date} assigned for {user_id}")
            return self._attach_recipes(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error assigning meal for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def remove_meals(self, user_id: str, day: date, meal_number: Optional[int] = None) -> int:
        """Remove one slot, or the whole day when meal_number is None"""
        try:
            query = self.supabase.table("meal_plans")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("assigned_date", day.isoformat())
            if meal_number is not None:
                query = query.eq("meal_number", meal_number)
            result = query.execute()
            return len(result.data or [])
        except Exception as e:
            logger.error(f"Error removing meals for {user_id} on {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def clear_week(self, user_id: str, start: date) -> int:
        try:
            week_start, week_end = week_window(start)
            result = self.supabase.table("meal_plans")\
                .delete()\
                .eq("user_id", user_id)\
                .gte("assigned_date", week_start)\
                .lte("assigned_date", week_end)\
                .execute()
            cleared = len(result.data or [])
            logger.info(f"Cleared {cleared} meals for {user_id} from {week_start}")
            return cleared
        except Exception as e:
            logger.error(f"Error clearing week for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_daily_macros(self, user_id: str, day: date) -> DailyMacrosResponse:
        """Targets for the day plus totals of the recipes planned on it"""
        try:
            result = self.supabase.table("daily_macros")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("date", day.isoformat())\
                .limit(1)\
                .execute()
            row = result.data[0] if result.data else {}
            targets = MacroTargets(
                calories=row.get("target_calories"),
                protein=row.get("target_protein"),
                carbs=row.get("target_carbs"),
                fat=row.get("target_fat"),
            )

            plans = self._plans_between(user_id, day.isoformat(), day.isoformat())
            recipes = self._recipes_by_id([p["recipe_id"] for p in plans])
            planned = sum_macros(recipes[p["recipe_id"]] for p in plans if p["recipe_id"] in recipes)

            return DailyMacrosResponse(date=day, targets=targets, planned=planned)
        except Exception as e:
            logger.error(f"Error fetching macros for {user_id} on {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def set_macro_targets(self, user_id: str, day: date, targets: MacroTargets) -> DailyMacrosResponse:
        try:
            self.supabase.table("daily_macros")\
                .upsert({
                    "user_id": user_id,
                    "date": day.isoformat(),
                    "target_calories": targets.calories,
                    "target_protein": targets.protein,
                    "target_carbs": targets.carbs,
                    "target_fat": targets.fat,
                }, on_conflict="user_id,date")\
                .execute()
            return self.get_daily_macros(user_id, day)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving macro targets for {user_id} on {day}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_templates(self, user_id: str) -> List[TemplateResponse]:
        """Caller's own templates plus every public one, newest first"""
        try:
            result = self.supabase.table("meal_templates")\
                .select("*")\
                .or_(f"user_id.eq.{user_id},is_public.eq.true")\
                .order("created_at", desc=True)\
                .execute()
            templates = result.data
            if not templates:
                return []

            meals = self.supabase.table("template_meals")\
                .select("*")\
                .in_("template_id", [t["id"] for t in templates])\
                .execute()
            meals_by_template: Dict[str, List[TemplateMealResponse]] = {}
            for meal in meals.data:
                meals_by_template.setdefault(meal["template_id"], []).append(TemplateMealResponse(**meal))

            return [
                TemplateResponse(**t, meals=meals_by_template.get(t["id"], []))
                for t in templates
            ]
        except Exception as e:
            logger.error(f"Error listing meal templates for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_template(self, user_id: str, template: TemplateCreate) -> TemplateResponse:
        """Create a template and its meals; the template is removed if the meals fail to save"""
        try:
            created = self.supabase.table("meal_templates").insert({
                "user_id": user_id,
                "name": template.name,
                "description": template.description,
                "is_public": template.is_public,
            }).execute()
            if not created.data:
                raise HTTPException(status_code=500, detail="Failed to create template")
            template_row = created.data[0]

            try:
                meals = self.supabase.table("template_meals").insert([
                    {"template_id": template_row["id"], **meal.model_dump()}
                    for meal in template.meals
                ]).execute()
            except Exception:
                self.supabase.table("meal_templates").delete().eq("id", template_row["id"]).execute()
                raise

            logger.info(f"Meal template {template_row['id']} created by {user_id}")
            return TemplateResponse(
                **template_row,
                meals=[TemplateMealResponse(**m) for m in meals.data]
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating meal template for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def apply_template(self, user_id: str, template_id: str, start: date) -> List[MealPlanResponse]:
        """Copy a template's meals onto the calendar from start, overwriting those slots"""
        try:
            template = self.supabase.table("meal_templates")\
                .select("id, user_id, is_public")\
                .eq("id", template_id)\
                .limit(1)\
                .execute()
            if not template.data:
                raise HTTPException(status_code=404, detail="Template not found")
            row = template.data[0]
            if row["user_id"] != user_id and not row.get("is_public"):
                raise HTTPException(status_code=403, detail="Template not accessible")

            meals = self.supabase.table("template_meals")\
                .select("*")\
                .eq("template_id", template_id)\
                .execute()
            if not meals.data:
                return []

            plans = [
                {
                    "user_id": user_id,
                    "recipe_id": meal["recipe_id"],
                    "assigned_date": (start + timedelta(days=meal["day_offset"])).isoformat(),
                    "meal_number": meal["meal_number"],
                }
                for meal in meals.data
            ]
            result = self.supabase.table("meal_plans")\
                .upsert(plans, on_conflict=MEAL_PLAN_CONFLICT)\
                .execute()

            logger.info(f"Template {template_id} applied for {user_id} from {start}")
            return self._attach_recipes(result.data)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error applying template {template_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def generate_shopping_list(self, user_id: str, request: ShoppingListCreate) -> ShoppingListResponse:
        """Aggregate ingredients of every planned meal in the range and save the list"""
        try:
            plans = self._plans_between(user_id, request.start_date.isoformat(), request.end_date.isoformat())
            recipes = self._recipes_by_id([p["recipe_id"] for p in plans])
            ingredients = merge_ingredients(
                recipes[p["recipe_id"]] for p in plans if p["recipe_id"] in recipes
            )

            result = self.supabase.table("shopping_lists").insert({
                "user_id": user_id,
                "start_date": request.start_date.isoformat(),
                "end_date": request.end_date.isoformat(),
                "ingredients": ingredients,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save shopping list")

            return ShoppingListResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error generating shopping list for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_shopping_lists(self, user_id: str) -> List[ShoppingListResponse]:
        try:
            result = self.supabase.table("shopping_lists")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(10)\
                .execute()
            return [ShoppingListResponse(**s) for s in result.data]
        except Exception as e:
            logger.error(f"Error listing shopping lists for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_shopping_list(self, user_id: str, list_id: str) -> bool:
        try:
            result = self.supabase.table("shopping_lists")\
                .delete()\
                .eq("id", list_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Shopping list not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting shopping list {list_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
