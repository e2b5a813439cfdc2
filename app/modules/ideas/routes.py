from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.ideas.schemas import (
    IdeaCreate, IdeaUpdate, IdeaStatusUpdate, IdeaResponse,
    IdeaDetailResponse, LikeResponse, ActivityResponse
)
from app.modules.ideas.service import IdeaService
from app.core.dependencies import (
    get_current_user_id, get_access_cache, get_idea_owner_row,
    can_manage_idea, check_idea_manager
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/ideas", tags=["ideas"])


def get_idea_service(supabase: Client = Depends(get_supabase)) -> IdeaService:
    return IdeaService(supabase)


@router.post("", response_model=IdeaResponse, status_code=201)
async def create_idea(
    idea_data: IdeaCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service)
):
    """Submit a new idea to the board"""
    return service.create_idea(idea_data, user_data["id"])


@router.get("/{idea_id}", response_model=IdeaDetailResponse)
async def get_idea(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Idea details with counts, creator profile and whether the caller may manage it"""
    idea = get_idea_owner_row(idea_id, supabase)
    return service.get_idea_detail(
        idea_id, user_data["id"],
        can_manage=can_manage_idea(idea, user_data, supabase, cache)
    )


@router.put("/{idea_id}", response_model=IdeaResponse)
async def update_idea(
    idea_id: str,
    idea_data: IdeaUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Edit an idea (owner or admin)"""
    idea = check_idea_manager(idea_id, user_data, supabase, cache)
    return service.update_idea(idea_id, idea_data, user_data["id"], current=idea)


@router.patch("/{idea_id}/status", response_model=IdeaResponse)
async def update_idea_status(
    idea_id: str,
    status_data: IdeaStatusUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Update status, priority and progress (owner or admin)"""
    idea = check_idea_manager(idea_id, user_data, supabase, cache)
    return service.update_status(idea_id, status_data, user_data["id"], current=idea)


@router.delete("/{idea_id}", status_code=204)
async def delete_idea(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Delete an idea (owner or admin)"""
    check_idea_manager(idea_id, user_data, supabase, cache)
    service.delete_idea(idea_id)
    return None


@router.post("/{idea_id}/like", response_model=LikeResponse)
async def like_idea(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service)
):
    return service.like(idea_id, user_data["id"])


@router.delete("/{idea_id}/like", response_model=LikeResponse)
async def unlike_idea(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service)
):
    return service.unlike(idea_id, user_data["id"])


@router.get("/{idea_id}/activity", response_model=List[ActivityResponse])
async def list_activity(
    idea_id: str,
    limit: int = Query(50, ge=1, le=200),
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service)
):
    """Activity log of an idea, newest first"""
    return service.list_activity(idea_id, limit)
