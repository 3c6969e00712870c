# Supabase table: featured_meals
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

featured_meals:
- id: uuid (primary key)
- recipe_id: uuid (foreign key to recipes.id)
- featured_date: date (unique) - one Meal of the Day per date
- created_by: uuid (nullable, foreign key to profiles.id)
- created_at: timestamp (default: now())
"""
