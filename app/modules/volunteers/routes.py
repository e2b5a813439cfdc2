from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase
from app.modules.volunteers.schemas import VolunteerApply, VolunteerStatusUpdate, VolunteerResponse
from app.modules.volunteers.service import VolunteerService
from app.core.dependencies import (
    get_current_user_id, get_access_cache, get_idea_owner_row,
    can_manage_idea, check_idea_manager
)
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["volunteers"])


def get_volunteer_service(supabase: Client = Depends(get_supabase)) -> VolunteerService:
    return VolunteerService(supabase)


@router.get("/ideas/{idea_id}/volunteers", response_model=List[VolunteerResponse])
async def list_volunteers(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: VolunteerService = Depends(get_volunteer_service)
):
    return service.list_volunteers(idea_id)


@router.post("/ideas/{idea_id}/volunteers", response_model=VolunteerResponse, status_code=201)
async def apply_as_volunteer(
    idea_id: str,
    application: VolunteerApply,
    user_data: Dict = Depends(get_current_user_id),
    service: VolunteerService = Depends(get_volunteer_service),
    supabase: Client = Depends(get_supabase)
):
    """Volunteer for an idea with an optional message and skills"""
    idea = get_idea_owner_row(idea_id, supabase)
    return service.apply(idea, application, user_data["id"])


@router.patch("/volunteers/{volunteer_id}", response_model=VolunteerResponse)
async def update_volunteer_status(
    volunteer_id: str,
    status_data: VolunteerStatusUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: VolunteerService = Depends(get_volunteer_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Approve or reject an application (idea owner or admin)"""
    volunteer = service.get_volunteer_row(volunteer_id)
    check_idea_manager(volunteer["idea_id"], user_data, supabase, cache)
    return service.update_status(volunteer, status_data.status, user_data["id"])


@router.delete("/volunteers/{volunteer_id}", status_code=204)
async def remove_volunteer(
    volunteer_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: VolunteerService = Depends(get_volunteer_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Remove an application (idea owner, admin, or the volunteer withdrawing)"""
    volunteer = service.get_volunteer_row(volunteer_id)
    if volunteer.get("user_id") != user_data["id"]:
        idea = get_idea_owner_row(volunteer["idea_id"], supabase)
        if not can_manage_idea(idea, user_data, supabase, cache):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the volunteer, the idea owner or an admin can remove this application"
            )
    service.remove(volunteer_id)
    return None
