# Supabase tables: meal_plans, daily_macros, meal_templates, template_meals, shopping_lists
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

meal_plans:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- recipe_id: uuid (foreign key to recipes.id)
- assigned_date: date (not null)
- meal_number: integer (1-6, see MEAL_LABELS)
- created_at: timestamp (default: now())
- unique(user_id, assigned_date, meal_number)

daily_macros:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- date: date (not null)
- target_calories, target_protein, target_carbs, target_fat: numeric (nullable)
- unique(user_id, date)

meal_templates:
- id: uuid (primary key)
- user_id: uuid (owner)
- name: text (not null)
- description: text (nullable)
- is_public: boolean (default: false)
- created_at: timestamp (default: now())

template_meals:
- id: uuid (primary key)
- template_id: uuid (foreign key to meal_templates.id, on delete cascade)
- recipe_id: uuid (foreign key to recipes.id)
- day_offset: integer (0-6)
- meal_number: integer (1-6)

shopping_lists:
- id: uuid (primary key)
- user_id: uuid (owner)
- start_date, end_date: date
- ingredients: jsonb - merged [{"name", "quantity", "unit"}]
- created_at: timestamp (default: now())
"""
