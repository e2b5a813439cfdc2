from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.teams.schemas import TeamCreate, TeamResponse, TeamMemberResponse
from app.modules.teams.service import TeamService
from app.core.dependencies import get_current_user_id, get_idea_owner_row
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["teams"])


def get_team_service(supabase: Client = Depends(get_supabase)) -> TeamService:
    return TeamService(supabase)


@router.get("/ideas/{idea_id}/teams", response_model=List[TeamResponse])
async def list_teams(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service)
):
    return service.list_teams(idea_id)


@router.post("/ideas/{idea_id}/teams", response_model=TeamResponse, status_code=201)
async def create_team(
    idea_id: str,
    team_data: TeamCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase)
):
    """Create a team for an idea; the creator becomes its leader"""
    get_idea_owner_row(idea_id, supabase)
    return service.create_team(idea_id, team_data, user_data["id"])


@router.post("/teams/{team_id}/members", response_model=TeamMemberResponse, status_code=201)
async def join_team(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service)
):
    return service.join_team(team_id, user_data["id"])


@router.delete("/teams/{team_id}/members/me", status_code=204)
async def leave_team(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service)
):
    service.leave_team(team_id, user_data["id"])
    return None
