# Supabase tables: posts, post_likes, post_comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

posts:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id)
- content: text (not null, 1-2000 chars)
- image_url: text (nullable)
- workout_id: uuid (nullable, foreign key to workouts.id)
- user_log_id: uuid (nullable, foreign key to user_logs.id)
- created_at: timestamp (default: now())

post_likes:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id)
- created_at: timestamp (default: now())
- unique(post_id, user_id)

post_comments:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id)
- content: text (not null, 1-500 chars)
- created_at: timestamp (default: now())
"""
