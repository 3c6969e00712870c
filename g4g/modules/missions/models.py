# Supabase tables: user_logs
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_logs:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- workout_id: uuid (foreign key to workouts.id, not null)
- date: date (not null, default: current_date)
- duration: integer (not null) - minutes
- notes: text (nullable)
- completed: boolean (default: true)
- created_at: timestamp (default: now())

Triggers on insert (outside this service):
- on_user_log_created: profiles.xp += 100, workout_count += 1, current_streak recalculated
- award_badges: inserts user_badges rows when thresholds are crossed
"""
