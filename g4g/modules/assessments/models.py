# Supabase tables: zero_day_tests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

zero_day_tests:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- pushups: integer (not null)
- squats: integer (not null)
- plank_seconds: integer (not null)
- assigned_tier: text (not null)
- previous_tier: text (nullable)
- created_at: timestamp (default: now())

The assigned tier is also written to profiles.tier.
"""
