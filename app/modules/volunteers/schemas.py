from pydantic import BaseModel, model_validator
from typing import Optional, List
from datetime import datetime
from app.modules.profiles.schemas import ProfileSummary


class VolunteerApply(BaseModel):
    message: Optional[str] = None
    skills: List[str] = []


class VolunteerStatusUpdate(BaseModel):
    status: str

    @model_validator(mode="after")
    def decision_only(self):
        if self.status not in ("approved", "rejected"):
            raise ValueError("status must be 'approved' or 'rejected'")
        return self


class VolunteerResponse(BaseModel):
    id: str
    idea_id: str
    user_id: str
    status: str
    message: Optional[str] = None
    skills: List[str] = []
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    profile: Optional[ProfileSummary] = None

    class Config:
        from_attributes = True
