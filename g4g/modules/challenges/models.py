# Supabase tables: challenges, challenge_participants
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

challenges:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- challenge_type: text (e.g. 'workouts', 'streak')
- goal_value: integer (nullable)
- start_date: date
- end_date: date
- status: text ('upcoming' | 'active' | 'completed')
- created_at: timestamp (default: now())

challenge_participants:
- id: uuid (primary key)
- challenge_id: uuid (foreign key to challenges.id)
- user_id: uuid (foreign key to profiles.id)
- progress: integer (default: 0) - advanced by database triggers
- completed: boolean (default: false)
- joined_at: timestamp (default: now())
- unique(challenge_id, user_id)
"""
