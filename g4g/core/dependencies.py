"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from g4g.database.supabase_client import get_supabase
from g4g.modules.auth.service import AuthService
from g4g.config.permissions_config import get_role_permissions
from g4g.core.tiers import is_admin, is_coach_or_admin
from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    return auth_service.get_current_user(token)


def fetch_profile(user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Return the profiles row for user_id, or None."""
    result = supabase.table("profiles")\
        .select("*")\
        .eq("id", user_id)\
        .limit(1)\
        .execute()
    return result.data[0] if result.data else None


def get_current_profile(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Profile row of the authenticated user, cached on the request."""
    cached = getattr(request.state, "profile", None)
    if cached is not None and cached.get("id") == user_data["id"]:
        return cached
    try:
        profile = fetch_profile(user_data["id"], supabase)
    except Exception as e:
        logger.error(f"Error loading profile for {user_data['id']}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load profile")
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    if profile.get("banned"):
        logger.warning(f"Rejected request from banned user {user_data['id']}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account suspended"
        )
    request.state.profile = profile
    return profile


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(profile: dict = Depends(get_current_profile)) -> dict:
        """Dependency to check the caller's role grants the required permission"""
        if required_permission not in get_role_permissions(profile.get("role") or "user"):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return profile
    return check_permission


def require_admin(profile: dict = Depends(get_current_profile)) -> dict:
    if not is_admin(profile):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return profile


def is_coach_of(coach_profile: dict, trainee_id: str, supabase: Client) -> bool:
    """True if trainee_id is assigned to the given coach"""
    result = supabase.table("profiles")\
        .select("id")\
        .eq("id", trainee_id)\
        .eq("coach_id", coach_profile["id"])\
        .limit(1)\
        .execute()
    return bool(result.data)


def can_view_profile(current_profile: dict, target_user_id: str, supabase: Client) -> bool:
    """Self, admin, or the target's coach"""
    if current_profile["id"] == target_user_id or is_admin(current_profile):
        return True
    if is_coach_or_admin(current_profile):
        return is_coach_of(current_profile, target_user_id, supabase)
    return False
