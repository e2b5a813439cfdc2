from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.comments.schemas import CommentCreate, CommentNode, CommentResponse
from app.modules.comments.service import CommentService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/ideas/{idea_id}/comments", tags=["comments"])


def get_comment_service(supabase: Client = Depends(get_supabase)) -> CommentService:
    return CommentService(supabase)


@router.get("", response_model=List[CommentNode])
async def list_comments(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service)
):
    """Comment threads of an idea, oldest first, replies nested"""
    return service.list_comments(idea_id)


@router.post("", response_model=CommentResponse, status_code=201)
async def add_comment(
    idea_id: str,
    comment_data: CommentCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service)
):
    """Comment on an idea, or reply when parent_comment_id is set"""
    return service.add_comment(idea_id, comment_data, user_data["id"])
