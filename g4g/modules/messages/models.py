# Supabase tables: messages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

messages:
- id: uuid (primary key)
- sender_id: uuid (foreign key to profiles.id)
- receiver_id: uuid (foreign key to profiles.id)
- content: text (not null, 1-1000 chars)
- is_read: boolean (default: false)
- created_at: timestamp (default: now())

Clients poll the conversation endpoint with ?since=<last created_at>.
"""
