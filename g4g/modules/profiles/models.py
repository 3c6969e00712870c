# Supabase tables: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (unique, not null) - synced from auth.users
- full_name: text (nullable)
- role: text (not null, default: 'user') - values: admin, coach, soldier, user
- tier: text (default: '.223') - values: .223, .556, .762, .50 Cal
- xp: integer (default: 0) - maintained by user_logs trigger
- current_streak: integer (default: 0) - maintained by user_logs trigger
- workout_count: integer (default: 0) - maintained by user_logs trigger
- coach_id: uuid (nullable, foreign key to profiles.id)
- avatar_url: text (nullable)
- bio: text (nullable)
- last_active: timestamp (default: now())
- onboarding_completed: boolean (default: false)
- dossier_complete: boolean (default: false)
- banned: boolean (default: false) - suspended accounts are refused by the API
- fitness_experience: text (nullable) - beginner, intermediate, advanced, athlete
- fitness_goal: text (nullable) - lose_fat, build_muscle, get_stronger, improve_endurance, general_fitness
- available_equipment: text[] (nullable)
- injuries_limitations: text (nullable)
- preferred_duration: integer (nullable) - minutes
- workout_days_per_week: integer (nullable)
- height_inches: integer (nullable)
- target_weight: numeric (nullable)
- date_of_birth: date (nullable)
- gender: text (nullable) - male, female, other, prefer_not_to_say
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Rows are created by the on_auth_user_created trigger on auth.users.
"""
