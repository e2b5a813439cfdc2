from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from app.modules.profiles.service import ProfileService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile"""
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the current user's profile"""
    return service.update_profile(user_data["id"], profile_data)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get another user's public profile"""
    return service.get_profile(user_id)
