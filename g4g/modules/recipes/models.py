# Supabase tables: recipes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

recipes:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- calories: integer (not null)
- protein: numeric (not null) - grams
- carbs: numeric (not null) - grams
- fat: numeric (not null) - grams
- ingredients: jsonb (not null) - [{"name": "chicken breast", "quantity": 6, "unit": "oz"}]
- instructions: jsonb (not null) - ordered list of steps
- prep_time_minutes: integer (nullable)
- servings: integer (nullable)
- image_url: text (nullable)
- min_tier: text (nullable) - gate the recipe behind a tier
- created_by: uuid (nullable, foreign key to profiles.id)
- created_at: timestamp (default: now())
"""
