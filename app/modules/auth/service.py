import hashlib
import time
import logging
from supabase import Client
from app.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (the board fires many parallel requests per token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth"""
        try:
            user_metadata = {}
            if register_data.full_name and register_data.full_name.strip():
                user_metadata["full_name"] = register_data.full_name.strip()

            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": user_metadata
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            logger.info(f"Registered user {auth_response.user.id}")
            return RegisterResponse(
                user_id=auth_response.user.id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # Supabase tokens are stateless JWTs; they still expire on their own
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False

    def set_admin(self, user_id: str, is_admin: bool, service_client: Optional[Client]) -> bool:
        """Grant or revoke the admin role in user_roles (requires service role key)"""
        if service_client is None:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot update user roles."
            )
        try:
            existing = service_client.table("user_roles")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("role", "admin")\
                .execute()

            if is_admin and not existing.data:
                service_client.table("user_roles").insert({
                    "user_id": user_id,
                    "role": "admin"
                }).execute()
            elif not is_admin and existing.data:
                service_client.table("user_roles")\
                    .delete()\
                    .eq("user_id", user_id)\
                    .eq("role", "admin")\
                    .execute()

            logger.info(f"Admin role for {user_id} set to {is_admin}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(
                status_code=500,
                detail=f"Failed to update admin role: {str(e)}"
            )
