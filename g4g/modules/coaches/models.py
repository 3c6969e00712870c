# Supabase table: profiles (coach directory columns)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Directory columns on profiles, only filled in for role = 'coach':

- bio: text (nullable)
- specialties: text (nullable, comma separated, e.g. 'strength, nutrition')
- certifications: text (nullable)
- years_experience: integer (nullable)
- avatar_url: text (nullable, public URL)
- location: text (nullable, free-form city / region)
- latitude: double precision (nullable)
- longitude: double precision (nullable)
- is_public: boolean (default: false) - listed in the public directory
"""
