"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (is_admin)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_access_cache(request: Request) -> Dict[str, Any]:
    """Dependency that returns request-scoped access cache."""
    return _get_request_cache(request)


def is_admin(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> bool:
    """Check the admin role through the is_admin RPC. Uses request-scoped cache when provided."""
    if cache is not None and "is_admin" in cache:
        return cache["is_admin"]
    try:
        result = supabase.rpc("is_admin", {"user_id": user_data["id"]}).execute()
        admin = bool(result.data)
    except Exception as e:
        logger.error(f"Error checking admin status: {e}")
        admin = False
    if cache is not None:
        cache["is_admin"] = admin
    return admin


def require_admin(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency to check that the current user holds the admin role"""
    if not is_admin(user_data, supabase, _get_request_cache(request)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required"
        )
    return user_data


def get_idea_owner_row(idea_id: str, supabase: Client) -> dict:
    """Return the owner, status and schedule columns of an idea or raise 404"""
    result = supabase.table("ideas")\
        .select("id, created_by, title, status, priority_level, progress_percentage, expected_start_date, expected_end_date")\
        .eq("id", idea_id)\
        .maybe_single()\
        .execute()
    if result is None or not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Idea not found"
        )
    return result.data


def can_manage_idea(idea: dict, user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> bool:
    """True if user created the idea or is an admin"""
    if idea.get("created_by") and idea["created_by"] == user_data["id"]:
        return True
    return is_admin(user_data, supabase, cache)


def check_idea_manager(
    idea_id: str,
    user_data: dict,
    supabase: Client,
    cache: Optional[Dict[str, Any]] = None
) -> dict:
    """Allow idea owner or admin. Returns the idea row."""
    idea = get_idea_owner_row(idea_id, supabase)
    if can_manage_idea(idea, user_data, supabase, cache):
        return idea
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You must be the idea owner or an admin to perform this action"
    )
