from pydantic import BaseModel
from typing import Optional, List
from app.modules.profiles.schemas import ProfileSummary


class CommentCreate(BaseModel):
    text: str
    parent_comment_id: Optional[str] = None


class CommentNode(BaseModel):
    id: str
    idea_id: str
    user_id: str
    text: str
    created_at: str
    parent_comment_id: Optional[str] = None
    profile: Optional[ProfileSummary] = None
    replies: List["CommentNode"] = []


CommentNode.model_rebuild()


class CommentResponse(BaseModel):
    id: str
    idea_id: str
    user_id: str
    text: str
    parent_comment_id: Optional[str] = None
    created_at: Optional[str] = None
