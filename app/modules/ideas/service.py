from supabase import Client
from app.modules.ideas.schemas import (
    IdeaCreate, IdeaUpdate, IdeaStatusUpdate, IdeaResponse, IdeaWithCounts,
    IdeaDetailResponse, LikeResponse, ActivityResponse, check_dates
)
from app.modules.profiles.service import ProfileService
from app.modules.notifications.service import NotificationService
from app.config.board_options import NOTIFICATION_TYPES, DEFAULT_STATUS, DEFAULT_PRIORITY
from typing import List, Optional, Dict, Any
from datetime import date
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _as_date(value) -> Optional[date]:
    """Stored date columns come back as ISO strings"""
    if not value:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class IdeaService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def log_activity(
        self,
        idea_id: str,
        user_id: str,
        action_type: str,
        description: str,
        metadata: Optional[Dict[str, Any]] = None
    ):
        """Record an activity entry through the log_idea_activity RPC. Failures are logged only."""
        try:
            params = {
                "p_idea_id": idea_id,
                "p_user_id": user_id,
                "p_action_type": action_type,
                "p_description": description,
            }
            if metadata is not None:
                params["p_metadata"] = metadata
            self.supabase.rpc("log_idea_activity", params).execute()
        except Exception as e:
            logger.error(f"Error logging activity {action_type} for idea {idea_id}: {e}")

    def create_idea(self, idea_data: IdeaCreate, user_id: str) -> IdeaResponse:
        """Create a new idea and optionally subscribe the creator to it"""
        try:
            result = self.supabase.table("ideas").insert({
                "title": idea_data.title.strip(),
                "description": (idea_data.description or "").strip() or None,
                "business_unit": idea_data.business_unit or None,
                "expected_start_date": idea_data.expected_start_date.isoformat() if idea_data.expected_start_date else None,
                "expected_end_date": idea_data.expected_end_date.isoformat() if idea_data.expected_end_date else None,
                "techstack": idea_data.techstack or None,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create idea")

            idea = result.data[0]

            if idea_data.subscribe_to_updates:
                self.supabase.table("idea_subscriptions").insert({
                    "user_id": user_id,
                    "idea_id": idea["id"],
                    "subscription_type": "all"
                }).execute()

                if idea_data.enable_email_notifications:
                    self.supabase.table("email_preferences").insert({
                        "user_id": user_id,
                        "idea_id": idea["id"],
                        "notification_types": list(NOTIFICATION_TYPES),
                        "is_active": True
                    }).execute()

            self.log_activity(idea["id"], user_id, "idea_created", f"Idea created: {idea['title']}")
            logger.info(f"Idea {idea['id']} created by {user_id}")
            return IdeaResponse(**idea)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_idea_by_id(self, idea_id: str) -> IdeaResponse:
        """Get idea by ID"""
        try:
            result = self.supabase.table("ideas")\
                .select("*")\
                .eq("id", idea_id)\
                .maybe_single()\
                .execute()

            if result is None or not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            return IdeaResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _attach_counts(self, ideas: List[dict], user_id: str) -> List[IdeaWithCounts]:
        """Add like/top-level comment counts and the caller's like flag using two bulk queries"""
        if not ideas:
            return []
        idea_ids = [idea["id"] for idea in ideas]

        likes_result = self.supabase.table("likes")\
            .select("idea_id, user_id")\
            .in_("idea_id", idea_ids)\
            .execute()
        comments_result = self.supabase.table("comments")\
            .select("idea_id")\
            .in_("idea_id", idea_ids)\
            .is_("parent_comment_id", "null")\
            .execute()

        likes_count: Dict[str, int] = {}
        liked_by_user = set()
        for like in likes_result.data or []:
            likes_count[like["idea_id"]] = likes_count.get(like["idea_id"], 0) + 1
            if like.get("user_id") == user_id:
                liked_by_user.add(like["idea_id"])

        comments_count: Dict[str, int] = {}
        for comment in comments_result.data or []:
            comments_count[comment["idea_id"]] = comments_count.get(comment["idea_id"], 0) + 1

        return [
            IdeaWithCounts(
                **idea,
                likes_count=likes_count.get(idea["id"], 0),
                comments_count=comments_count.get(idea["id"], 0),
                is_liked=idea["id"] in liked_by_user,
            )
            for idea in ideas
        ]

    def list_ideas_with_counts(self, user_id: str) -> List[IdeaWithCounts]:
        """All ideas, newest first, with counts for the board"""
        try:
            result = self.supabase.table("ideas")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return self._attach_counts(result.data or [], user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_idea_detail(self, idea_id: str, user_id: str, can_manage: bool = False) -> IdeaDetailResponse:
        """Idea with counts and the creator's profile"""
        idea = self.get_idea_by_id(idea_id)
        try:
            with_counts = self._attach_counts([idea.model_dump()], user_id)[0]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        creator = None
        if idea.created_by:
            creator = ProfileService(self.supabase).get_profiles_map([idea.created_by]).get(idea.created_by)
        return IdeaDetailResponse(**with_counts.model_dump(), creator=creator, can_manage=can_manage)

    def update_idea(self, idea_id: str, idea_data: IdeaUpdate, user_id: str, current: Optional[dict] = None) -> IdeaResponse:
        """
        Edit the descriptive fields of an idea; logs idea_updated and notifies subscribers.
        ``current`` is the stored row; a date sent alone is checked against the stored other date.
        """
        fields = idea_data.model_fields_set
        current = current or {}
        start = idea_data.expected_start_date if "expected_start_date" in fields else _as_date(current.get("expected_start_date"))
        end = idea_data.expected_end_date if "expected_end_date" in fields else _as_date(current.get("expected_end_date"))
        try:
            check_dates(start, end)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        try:
            update_data: Dict[str, Any] = {}
            if "title" in fields and idea_data.title is not None:
                update_data["title"] = idea_data.title.strip()
            if "description" in fields:
                update_data["description"] = (idea_data.description or "").strip() or None
            if "business_unit" in fields:
                unit = idea_data.business_unit
                update_data["business_unit"] = None if not unit or unit == "none" else unit
            if "expected_start_date" in fields:
                update_data["expected_start_date"] = start.isoformat() if start else None
            if "expected_end_date" in fields:
                update_data["expected_end_date"] = end.isoformat() if end else None
            if "techstack" in fields:
                update_data["techstack"] = idea_data.techstack or None

            if not update_data:
                raise HTTPException(status_code=400, detail="No fields to update")

            result = self.supabase.table("ideas")\
                .update(update_data)\
                .eq("id", idea_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            idea = IdeaResponse(**result.data[0])
            self.log_activity(idea_id, user_id, "idea_updated", f"Idea updated: {idea.title}")
            NotificationService(self.supabase).notify_subscribers(
                idea_id, user_id, "updates",
                "Idea updated",
                f'"{idea.title}" has been updated'
            )
            return idea
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, idea_id: str, status_data: IdeaStatusUpdate, user_id: str, current: Optional[dict] = None) -> IdeaResponse:
        """
        Update status, priority and progress; priority and progress left out keep their
        stored values. Notifies subscribers when the status changes.
        """
        current = current or {}
        previous_status = current.get("status") or DEFAULT_STATUS
        priority = status_data.priority_level or current.get("priority_level") or DEFAULT_PRIORITY
        progress = status_data.progress_percentage
        if progress is None:
            progress = current.get("progress_percentage") or 0
        try:
            result = self.supabase.table("ideas")\
                .update({
                    "status": status_data.status,
                    "priority_level": priority,
                    "progress_percentage": progress
                })\
                .eq("id", idea_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            idea = IdeaResponse(**result.data[0])
            self.log_activity(
                idea_id, user_id, "status_changed",
                f"Status updated to {status_data.status}, priority to {priority}, "
                f"progress to {progress}%",
                {"previous_status": previous_status, "status": status_data.status}
            )
            if previous_status != status_data.status:
                NotificationService(self.supabase).notify_subscribers(
                    idea_id, user_id, "status_change",
                    "Status changed",
                    f'"{idea.title}" is now {status_data.status.replace("_", " ")}'
                )
            return idea
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_idea(self, idea_id: str) -> bool:
        """Delete idea (child rows cascade in the database)"""
        try:
            result = self.supabase.table("ideas")\
                .delete()\
                .eq("id", idea_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            logger.info(f"Idea {idea_id} deleted")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _count_likes(self, idea_id: str) -> int:
        result = self.supabase.table("likes")\
            .select("idea_id", count="exact")\
            .eq("idea_id", idea_id)\
            .execute()
        if result.count is not None:
            return result.count
        return len(result.data or [])

    def like(self, idea_id: str, user_id: str) -> LikeResponse:
        """Like an idea; liking twice is a no-op"""
        try:
            self.get_idea_by_id(idea_id)
            existing = self.supabase.table("likes")\
                .select("idea_id")\
                .eq("idea_id", idea_id)\
                .eq("user_id", user_id)\
                .execute()

            if not existing.data:
                self.supabase.table("likes").insert({
                    "idea_id": idea_id,
                    "user_id": user_id
                }).execute()

            return LikeResponse(idea_id=idea_id, liked=True, likes_count=self._count_likes(idea_id))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def unlike(self, idea_id: str, user_id: str) -> LikeResponse:
        """Remove the caller's like"""
        try:
            self.supabase.table("likes")\
                .delete()\
                .eq("idea_id", idea_id)\
                .eq("user_id", user_id)\
                .execute()

            return LikeResponse(idea_id=idea_id, liked=False, likes_count=self._count_likes(idea_id))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_activity(self, idea_id: str, limit: int = 50) -> List[ActivityResponse]:
        """Activity log of an idea, newest first"""
        try:
            result = self.supabase.table("idea_activity")\
                .select("*")\
                .eq("idea_id", idea_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return [ActivityResponse(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
