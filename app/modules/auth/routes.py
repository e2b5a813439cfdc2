from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, SupabaseClient
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    SetAdminRequest
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_current_user_id, is_admin, require_admin, get_access_cache
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_admin_client() -> Optional[Client]:
    """Service-role client, or None when the key is not configured"""
    if not SupabaseClient.has_service_client():
        return None
    return SupabaseClient.get_service_client()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Get current authenticated user and admin flag (for frontend UI)."""
    return {**current_user, "is_admin": is_admin(current_user, supabase, cache)}


@router.post("/admins", status_code=200)
async def set_admin(
    request: SetAdminRequest,
    current_user: Dict = Depends(require_admin),
    service: AuthService = Depends(get_auth_service),
    admin_client: Optional[Client] = Depends(get_admin_client)
):
    """Grant or revoke the admin role (requires current user to be admin)"""
    service.set_admin(request.user_id, request.is_admin, admin_client)
    return {
        "message": f"User {request.user_id} admin status set to {request.is_admin}",
        "user_id": request.user_id,
        "is_admin": request.is_admin
    }
