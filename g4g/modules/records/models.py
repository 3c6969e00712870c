# Supabase table: personal_records
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

personal_records:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- exercise_name: text (not null)
- record_type: text ('weight' | 'reps' | 'time')
- value: numeric (not null, > 0)
- unit: text (not null, e.g. 'lbs', 'reps', 'seconds')
- notes: text (nullable)
- achieved_at: date (not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
