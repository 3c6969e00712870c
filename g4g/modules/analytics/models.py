# Supabase tables: body_metrics (reads user_logs, user_badges and profiles)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

body_metrics:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- weight: numeric (not null) - pounds
- body_fat_percentage: numeric (nullable)
- notes: text (nullable)
- recorded_at: date (not null)
- created_at: timestamp (default: now())
"""
