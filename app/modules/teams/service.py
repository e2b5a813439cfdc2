from supabase import Client
from app.modules.teams.schemas import TeamCreate, TeamResponse, TeamMemberResponse
from app.modules.profiles.service import ProfileService
from typing import List, Dict
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def normalize_role(role) -> str:
    return "leader" if role == "leader" else "member"


class TeamService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_teams(self, idea_id: str) -> List[TeamResponse]:
        """Teams of an idea, newest first, with members and their profiles"""
        try:
            teams_result = self.supabase.table("idea_teams")\
                .select("*")\
                .eq("idea_id", idea_id)\
                .order("created_at", desc=True)\
                .execute()
            teams = teams_result.data or []
            if not teams:
                return []

            members_result = self.supabase.table("team_members")\
                .select("*")\
                .in_("team_id", [team["id"] for team in teams])\
                .execute()
            members = members_result.data or []
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        profiles = ProfileService(self.supabase).get_profiles_map(m.get("user_id") for m in members)
        members_by_team: Dict[str, List[TeamMemberResponse]] = {}
        for member in members:
            members_by_team.setdefault(member["team_id"], []).append(TeamMemberResponse(
                **{**member, "role": normalize_role(member.get("role"))},
                profile=profiles.get(member.get("user_id"))
            ))

        return [
            TeamResponse(**team, members=members_by_team.get(team["id"], []))
            for team in teams
        ]

    def get_team_row(self, team_id: str) -> dict:
        result = self.supabase.table("idea_teams")\
            .select("*")\
            .eq("id", team_id)\
            .maybe_single()\
            .execute()
        if result is None or not result.data:
            raise HTTPException(status_code=404, detail="Team not found")
        return result.data

    def create_team(self, idea_id: str, team_data: TeamCreate, user_id: str) -> TeamResponse:
        """Create a team; the creator joins as leader"""
        name = (team_data.name or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Team name is required")
        try:
            result = self.supabase.table("idea_teams").insert({
                "idea_id": idea_id,
                "name": name,
                "description": (team_data.description or "").strip() or None,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create team")

            team = result.data[0]
            member_result = self.supabase.table("team_members").insert({
                "team_id": team["id"],
                "user_id": user_id,
                "role": "leader"
            }).execute()

            members = [TeamMemberResponse(**m) for m in member_result.data or []]
            logger.info(f"Team {team['id']} created for idea {idea_id}")
            return TeamResponse(**team, members=members)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def join_team(self, team_id: str, user_id: str) -> TeamMemberResponse:
        """Join a team as member"""
        try:
            self.get_team_row(team_id)
            existing = self.supabase.table("team_members")\
                .select("id")\
                .eq("team_id", team_id)\
                .eq("user_id", user_id)\
                .execute()

            if existing.data:
                raise HTTPException(status_code=409, detail="Already a member of this team")

            result = self.supabase.table("team_members").insert({
                "team_id": team_id,
                "user_id": user_id,
                "role": "member"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to join team")

            return TeamMemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def leave_team(self, team_id: str, user_id: str) -> bool:
        """Leave a team"""
        try:
            result = self.supabase.table("team_members")\
                .delete()\
                .eq("team_id", team_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Not a member of this team")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
