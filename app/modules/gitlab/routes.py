from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.gitlab.schemas import GitlabIntegrationCreate, GitlabIntegrationResponse, GitlabSyncResponse
from app.modules.gitlab.service import GitlabService
from app.core.dependencies import get_current_user_id, get_access_cache, check_idea_manager
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/ideas/{idea_id}/gitlab", tags=["gitlab"])


def get_gitlab_service(supabase: Client = Depends(get_supabase)) -> GitlabService:
    return GitlabService(supabase)


@router.get("", response_model=Optional[GitlabIntegrationResponse])
async def get_integration(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: GitlabService = Depends(get_gitlab_service)
):
    """GitLab integration of an idea (null when not linked)"""
    return service.get_integration(idea_id)


@router.post("", response_model=GitlabIntegrationResponse, status_code=201)
async def create_integration(
    idea_id: str,
    data: GitlabIntegrationCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: GitlabService = Depends(get_gitlab_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Link a GitLab project (idea owner or admin)"""
    check_idea_manager(idea_id, user_data, supabase, cache)
    return service.create_integration(idea_id, data)


@router.post("/sync", response_model=GitlabSyncResponse)
async def sync_issues(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: GitlabService = Depends(get_gitlab_service)
):
    """Pull issue counts and refresh idea progress"""
    return service.sync(idea_id)


@router.delete("", status_code=204)
async def remove_integration(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: GitlabService = Depends(get_gitlab_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Unlink the GitLab project (idea owner or admin)"""
    check_idea_manager(idea_id, user_data, supabase, cache)
    service.remove_integration(idea_id)
    return None
