from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime, date
from app.config.board_options import IDEA_STATUSES, PRIORITY_LEVELS
from app.modules.profiles.schemas import ProfileSummary


def check_dates(start: Optional[date], end: Optional[date]):
    if start and end and end < start:
        raise ValueError("expected_end_date cannot be before expected_start_date")


class IdeaCreate(BaseModel):
    title: str
    description: Optional[str] = None
    business_unit: Optional[str] = None
    expected_start_date: Optional[date] = None
    expected_end_date: Optional[date] = None
    techstack: List[str] = []
    subscribe_to_updates: bool = True
    enable_email_notifications: bool = True

    @model_validator(mode="after")
    def validate_idea(self):
        if not self.title or not self.title.strip():
            raise ValueError("Title is required")
        check_dates(self.expected_start_date, self.expected_end_date)
        return self


class IdeaUpdate(BaseModel):
    """Editable idea fields. Status, priority and progress change only through IdeaStatusUpdate."""
    title: Optional[str] = None
    description: Optional[str] = None
    business_unit: Optional[str] = None  # "none" clears the business unit
    expected_start_date: Optional[date] = None
    expected_end_date: Optional[date] = None
    techstack: Optional[List[str]] = None

    class Config:
        extra = "forbid"

    @model_validator(mode="after")
    def validate_update(self):
        if self.title is not None and not self.title.strip():
            raise ValueError("Title cannot be empty")
        check_dates(self.expected_start_date, self.expected_end_date)
        return self


class IdeaStatusUpdate(BaseModel):
    status: str
    priority_level: Optional[str] = None  # omitted keeps the stored value
    progress_percentage: Optional[int] = Field(None, ge=0, le=100)

    @model_validator(mode="after")
    def validate_status(self):
        if self.status not in IDEA_STATUSES:
            raise ValueError(f"Invalid status: {self.status}")
        if self.priority_level is not None and self.priority_level not in PRIORITY_LEVELS:
            raise ValueError(f"Invalid priority: {self.priority_level}")
        return self


class IdeaResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    business_unit: Optional[str] = None
    techstack: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    status: Optional[str] = None
    priority_level: Optional[str] = None
    progress_percentage: Optional[int] = None
    expected_start_date: Optional[str] = None
    expected_end_date: Optional[str] = None
    assigned_to: Optional[List[str]] = None
    forwarded_to: Optional[List[str]] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class IdeaWithCounts(IdeaResponse):
    likes_count: int = 0
    comments_count: int = 0  # top-level comments only
    is_liked: bool = False


class IdeaDetailResponse(IdeaWithCounts):
    creator: Optional[ProfileSummary] = None
    can_manage: bool = False


class LikeResponse(BaseModel):
    idea_id: str
    liked: bool
    likes_count: int


class ActivityResponse(BaseModel):
    id: str
    idea_id: str
    user_id: str
    action_type: str
    description: str
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
