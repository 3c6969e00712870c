# Supabase tables: user_badges
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_badges:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- badge_name: text (one of BADGE_DEFINITIONS names)
- earned_at: timestamp (default: now())
- unique(user_id, badge_name)

Rows are written by the award_badges trigger on user_logs; the API only reads them.
"""
