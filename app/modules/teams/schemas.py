from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from app.modules.profiles.schemas import ProfileSummary


class TeamCreate(BaseModel):
    name: str
    description: Optional[str] = None


class TeamMemberResponse(BaseModel):
    id: str
    team_id: str
    user_id: str
    role: str
    joined_at: Optional[datetime] = None
    profile: Optional[ProfileSummary] = None

    class Config:
        from_attributes = True


class TeamResponse(BaseModel):
    id: str
    idea_id: str
    name: str
    description: Optional[str] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    members: List[TeamMemberResponse] = []

    class Config:
        from_attributes = True
