# Supabase tables: daily_briefings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

daily_briefings:
- id: uuid (primary key)
- content: text (not null)
- active: boolean (default: false) - at most one row is active
- created_by: uuid (nullable, foreign key to profiles.id)
- created_at: timestamp (default: now())
"""
