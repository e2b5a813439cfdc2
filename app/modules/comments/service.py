from supabase import Client
from app.modules.comments.schemas import CommentCreate, CommentNode, CommentResponse
from app.modules.comments.tree import build_comment_tree, count_comments
from app.modules.profiles.service import ProfileService
from app.modules.notifications.service import NotificationService
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_comments(self, idea_id: str) -> List[CommentNode]:
        """Threaded comments of an idea with author profiles"""
        try:
            result = self.supabase.table("comments")\
                .select("*")\
                .eq("idea_id", idea_id)\
                .order("created_at", desc=False)\
                .execute()
            rows = result.data or []
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        profiles = ProfileService(self.supabase).get_profiles_map(row.get("user_id") for row in rows)
        tree = build_comment_tree(rows, profiles)
        logger.debug(f"Idea {idea_id}: {len(tree)} thread(s), {count_comments(tree)} of {len(rows)} comment(s) attached")
        return tree

    def add_comment(self, idea_id: str, comment_data: CommentCreate, user_id: str) -> CommentResponse:
        """Add a top-level comment or a reply"""
        text = (comment_data.text or "").strip()
        if not text:
            raise HTTPException(status_code=400, detail="Comment text cannot be empty")
        try:
            idea_result = self.supabase.table("ideas")\
                .select("id, title")\
                .eq("id", idea_id)\
                .maybe_single()\
                .execute()
            if idea_result is None or not idea_result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            if comment_data.parent_comment_id:
                parent_result = self.supabase.table("comments")\
                    .select("id, idea_id")\
                    .eq("id", comment_data.parent_comment_id)\
                    .maybe_single()\
                    .execute()
                if parent_result is None or not parent_result.data:
                    raise HTTPException(status_code=404, detail="Parent comment not found")
                if parent_result.data.get("idea_id") != idea_id:
                    raise HTTPException(status_code=400, detail="Parent comment belongs to another idea")

            result = self.supabase.table("comments").insert({
                "idea_id": idea_id,
                "user_id": user_id,
                "text": text,
                "parent_comment_id": comment_data.parent_comment_id or None
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add comment")

            title = idea_result.data.get("title") or "an idea"
            if comment_data.parent_comment_id:
                heading, message = "New reply", f'Someone replied to a comment on "{title}"'
            else:
                heading, message = "New comment", f'Someone commented on "{title}"'
            NotificationService(self.supabase).notify_subscribers(idea_id, user_id, "comments", heading, message)

            return CommentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
