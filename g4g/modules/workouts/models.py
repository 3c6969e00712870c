# Supabase tables: workouts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

workouts:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- tier: text (not null) - .223, .556, .762, .50 Cal
- video_url: text (nullable) - YouTube link
- scheduled_date: date (not null)
- sets_reps: jsonb (not null) - [{"exercise": "Pushups", "reps": "3 sets x 10"}]
- created_by: uuid (nullable, foreign key to profiles.id)
- created_at: timestamp (default: now())
- unique constraint on (tier, scheduled_date)
"""
