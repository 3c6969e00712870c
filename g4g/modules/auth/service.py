import hashlib
import logging
import time
from supabase import Client
from g4g.config import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# token sha256 -> (user_data, expiry on the monotonic clock)
_AUTH_USER_CACHE: Dict[str, tuple] = {}


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


def _cached_user(cache_key: str, now: float) -> Optional[Dict[str, Any]]:
    entry = _AUTH_USER_CACHE.get(cache_key)
    if entry is None:
        return None
    user_data, expiry = entry
    if now >= expiry:
        del _AUTH_USER_CACHE[cache_key]
        return None
    return user_data


def _remember_user(cache_key: str, user_data: Dict[str, Any], now: float):
    """Cache a verified user; expired entries are evicted before giving up on a full cache"""
    if len(_AUTH_USER_CACHE) >= settings.auth_cache_max_size:
        for key in [k for k, (_, expiry) in _AUTH_USER_CACHE.items() if expiry <= now]:
            del _AUTH_USER_CACHE[key]
    if len(_AUTH_USER_CACHE) < settings.auth_cache_max_size:
        _AUTH_USER_CACHE[cache_key] = (user_data, now + settings.auth_cache_ttl_seconds)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """
        Resolve the Supabase Auth user behind a bearer token.
        Results are cached briefly so the message poll does not hit Supabase Auth every few seconds.
        """
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        cached = _cached_user(cache_key, now)
        if cached is not None:
            return cached

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.warning("Token verification failed: %s", e)
            message = str(e).lower()
            if "jwt" in message or "expired" in message or "invalid" in message:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
        }
        _remember_user(cache_key, user_data, now)
        return user_data
