# Supabase tables: buddies, notifications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

buddies:
- id: uuid (primary key)
- user_id: uuid (requester, foreign key to profiles.id)
- buddy_id: uuid (addressee, foreign key to profiles.id)
- status: text ('pending' | 'accepted')
- created_at: timestamp (default: now())
- unique(user_id, buddy_id)

An accepted friendship is stored as two rows, one per direction, so each
user lists their buddies with a single user_id filter.

notifications:
- id: uuid (primary key)
- user_id: uuid (recipient)
- sender_id: uuid (nullable)
- type: text (e.g. 'buddy_nudge')
- title: text
- message: text
- is_read: boolean (default: false)
- created_at: timestamp (default: now())
"""
