# Supabase Auth
# Accounts, sessions and JWTs live in Supabase's auth.users table.
# Sign-up, login and password reset happen client-side against Supabase Auth;
# this service only verifies the bearer token on each request.

"""
Supabase Auth calls used here:
- auth.get_user(jwt=...) - Resolve the current user from a bearer token

Every auth.users row is expected to have a matching public.profiles row
(created by the on_auth_user_created trigger), see modules/profiles/models.py.
"""
