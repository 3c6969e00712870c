"""
Seed Data Script
Populates today's workout for every tier, an active daily briefing and a set
of starter recipes. Safe to re-run: workouts upsert on (tier, scheduled_date),
prior briefings are deactivated and recipes are matched by title.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from g4g.config import settings
from g4g.core.dates import today_iso, utcnow_iso
from g4g.core.tiers import NOVICE, INTERMEDIATE, ADVANCED, ELITE
from g4g.database.supabase_client import SupabaseClient
from supabase import Client
from typing import Optional
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_VIDEO = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

BRIEFING = (
    "Soldiers, today is your day to dominate. Every rep counts, every set matters. "
    "Push beyond your limits and prove to yourself what you're truly capable of. "
    "The mission starts now. Lock and load!"
)

WORKOUTS = [
    {
        "tier": NOVICE,
        "title": "BASIC RECON",
        "description": "Foundation workout focusing on bodyweight basics. Perfect for building base strength and form.",
        "sets_reps": [
            {"exercise": "Pushups", "reps": "3 sets x 8-10 reps"},
            {"exercise": "Bodyweight Squats", "reps": "3 sets x 15 reps"},
            {"exercise": "Plank Hold", "reps": "3 sets x 30 seconds"},
            {"exercise": "Jumping Jacks", "reps": "2 sets x 20 reps"},
        ],
    },
    {
        "tier": INTERMEDIATE,
        "title": "STANDARD PATROL",
        "description": "Intermediate intensity circuit. Focus on controlled movement and breathing.",
        "sets_reps": [
            {"exercise": "Pushups", "reps": "4 sets x 15-20 reps"},
            {"exercise": "Jump Squats", "reps": "4 sets x 12 reps"},
            {"exercise": "Mountain Climbers", "reps": "4 sets x 20 reps"},
            {"exercise": "Plank Hold", "reps": "3 sets x 45 seconds"},
            {"exercise": "Burpees", "reps": "3 sets x 10 reps"},
        ],
    },
    {
        "tier": ADVANCED,
        "title": "ASSAULT PROTOCOL",
        "description": "High-intensity advanced workout. Push beyond your limits with explosive movements.",
        "sets_reps": [
            {"exercise": "Explosive Pushups", "reps": "5 sets x 15 reps"},
            {"exercise": "Pistol Squats (each leg)", "reps": "4 sets x 8 reps"},
            {"exercise": "Burpee Box Jumps", "reps": "4 sets x 12 reps"},
            {"exercise": "Plank to Pike", "reps": "4 sets x 15 reps"},
            {"exercise": "Diamond Pushups", "reps": "3 sets x 12 reps"},
        ],
    },
    {
        "tier": ELITE,
        "title": "SPECIAL OPS MISSION",
        "description": "Elite-level workout. Maximum intensity, precision execution. This is where warriors are forged.",
        "sets_reps": [
            {"exercise": "One-Arm Pushups (each arm)", "reps": "5 sets x 10 reps"},
            {"exercise": "Pistol Squats (each leg)", "reps": "5 sets x 12 reps"},
            {"exercise": "Burpee Muscle-Ups", "reps": "5 sets x 8 reps"},
            {"exercise": "L-Sit Hold", "reps": "4 sets x 30 seconds"},
            {"exercise": "Sprint Intervals", "reps": "10 rounds x 30 seconds on, 30 seconds rest"},
        ],
    },
]

RECIPES = [
    {
        "title": "TACTICAL PROTEIN BOWL",
        "description": "Grilled chicken over brown rice with steamed vegetables.",
        "calories": 520, "protein": 45, "carbs": 55, "fat": 12,
        "ingredients": [
            {"name": "Chicken breast", "quantity": 6, "unit": "oz"},
            {"name": "Brown rice", "quantity": 1, "unit": "cup"},
            {"name": "Broccoli", "quantity": 1, "unit": "cup"},
            {"name": "Carrots", "quantity": 0.5, "unit": "cup"},
        ],
        "instructions": [
            "Grill the chicken breast",
            "Cook the brown rice",
            "Steam broccoli and carrots",
            "Assemble: rice base, chicken on top, vegetables on the flank",
            "Drizzle with low-sodium soy sauce",
        ],
        "prep_time_minutes": 30,
        "servings": 1,
    },
    {
        "title": "COMBAT OATS",
        "description": "Protein oats topped with banana, berries and almond butter.",
        "calories": 380, "protein": 18, "carbs": 62, "fat": 8,
        "ingredients": [
            {"name": "Oats", "quantity": 1, "unit": "cup"},
            {"name": "Protein powder", "quantity": 1, "unit": "scoop"},
            {"name": "Banana", "quantity": 1, "unit": None},
            {"name": "Almond butter", "quantity": 1, "unit": "tbsp"},
        ],
        "instructions": [
            "Mix oats with 1.5 cups water or almond milk",
            "Microwave 2-3 minutes or cook on the stove",
            "Stir in the protein powder",
            "Top with sliced banana, berries and almond butter",
        ],
        "prep_time_minutes": 10,
        "servings": 1,
    },
    {
        "title": "RANGER BEEF STIR-FRY",
        "description": "Lean beef stir-fried with peppers and snap peas over quinoa.",
        "calories": 445, "protein": 38, "carbs": 42, "fat": 15,
        "ingredients": [
            {"name": "Lean beef", "quantity": 6, "unit": "oz"},
            {"name": "Olive oil", "quantity": 1, "unit": "tbsp"},
            {"name": "Bell peppers", "quantity": 1, "unit": "cup"},
            {"name": "Quinoa", "quantity": 1, "unit": "cup"},
        ],
        "instructions": [
            "Slice the beef into strips",
            "Heat the wok with olive oil",
            "Stir-fry beef on high heat for 2-3 minutes",
            "Add vegetables and season with ginger, garlic and soy sauce",
            "Serve over quinoa",
        ],
        "prep_time_minutes": 25,
        "servings": 1,
    },
    {
        "title": "SPECIAL FORCES SALMON",
        "description": "Baked salmon with roasted sweet potato and asparagus.",
        "calories": 485, "protein": 42, "carbs": 35, "fat": 20,
        "ingredients": [
            {"name": "Salmon fillet", "quantity": 6, "unit": "oz"},
            {"name": "Sweet potato", "quantity": 1, "unit": None},
            {"name": "Asparagus", "quantity": 8, "unit": "spears"},
            {"name": "Lemon", "quantity": 0.5, "unit": None},
        ],
        "instructions": [
            "Season the salmon with lemon, dill, salt and pepper",
            "Bake at 400F for 12-15 minutes",
            "Roast the sweet potato until tender",
            "Steam asparagus with garlic",
        ],
        "prep_time_minutes": 35,
        "servings": 1,
        "min_tier": INTERMEDIATE,
    },
]


def promote_admin(supabase: Client, email: Optional[str]) -> Optional[str]:
    """Give the configured account the admin role; returns its profile id"""
    if not email:
        logger.info("SEED_ADMIN_EMAIL not set, skipping admin promotion")
        return None
    existing = supabase.table("profiles")\
        .select("id")\
        .eq("email", email.lower())\
        .limit(1)\
        .execute()
    if not existing.data:
        logger.warning(f"No profile for {email}; the user must sign up first")
        return None
    admin_id = existing.data[0]["id"]
    supabase.table("profiles")\
        .update({"role": "admin", "onboarding_completed": True, "updated_at": utcnow_iso()})\
        .eq("id", admin_id)\
        .execute()
    logger.info(f"Promoted {email} to admin")
    return admin_id


def seed_briefing(supabase: Client, admin_id: Optional[str]):
    logger.info("Seeding daily briefing...")
    supabase.table("daily_briefings")\
        .update({"active": False})\
        .eq("active", True)\
        .execute()
    supabase.table("daily_briefings").insert({
        "content": BRIEFING,
        "active": True,
        "created_by": admin_id,
    }).execute()


def seed_workouts(supabase: Client) -> int:
    logger.info("Seeding workouts...")
    scheduled_date = today_iso()
    count = 0
    for workout in WORKOUTS:
        try:
            supabase.table("workouts")\
                .upsert(
                    {**workout, "video_url": DEMO_VIDEO, "scheduled_date": scheduled_date},
                    on_conflict="tier,scheduled_date"
                )\
                .execute()
            count += 1
        except Exception as e:
            logger.error(f"Error seeding workout for tier {workout['tier']}: {e}")
    logger.info(f"Workouts seeded: {count} for {scheduled_date}")
    return count


def seed_recipes(supabase: Client, admin_id: Optional[str]) -> int:
    logger.info("Seeding recipes...")
    created_count = 0
    for recipe in RECIPES:
        try:
            existing = supabase.table("recipes")\
                .select("id")\
                .eq("title", recipe["title"])\
                .limit(1)\
                .execute()
            if existing.data:
                logger.debug(f"Recipe exists: {recipe['title']}")
                continue
            supabase.table("recipes").insert({**recipe, "created_by": admin_id}).execute()
            created_count += 1
        except Exception as e:
            logger.error(f"Error seeding recipe {recipe['title']}: {e}")
    logger.info(f"Recipes seeded: {created_count} created")
    return created_count


def main():
    """Main function to seed starter content"""
    try:
        supabase = SupabaseClient.get_service_client()

        logger.info("Starting seed...")
        admin_id = promote_admin(supabase, settings.seed_admin_email)
        seed_briefing(supabase, admin_id)
        seed_workouts(supabase)
        seed_recipes(supabase, admin_id)
        logger.info("Seeding completed successfully!")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
