import json
from supabase import Client
from app.modules.volunteers.schemas import VolunteerApply, VolunteerResponse
from app.modules.profiles.service import ProfileService
from app.modules.notifications.service import NotificationService
from app.modules.profiles.schemas import ProfileSummary
from typing import List, Optional, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def normalize_status(value: Any) -> str:
    if value in ("approved", "rejected"):
        return value
    return "pending"


def normalize_skills(value: Any) -> List[str]:
    """Skills column holds a list, or a JSON string encoding one; anything else is empty"""
    if isinstance(value, list):
        return [s for s in value if isinstance(s, str)]
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return []
        if isinstance(parsed, list):
            return [s for s in parsed if isinstance(s, str)]
    return []


def to_volunteer(row: dict, profile: Optional[ProfileSummary] = None) -> VolunteerResponse:
    data = dict(row)
    data["status"] = normalize_status(row.get("status"))
    data["skills"] = normalize_skills(row.get("skills"))
    data["profile"] = profile
    return VolunteerResponse(**data)


class VolunteerService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_volunteers(self, idea_id: str) -> List[VolunteerResponse]:
        """Volunteers of an idea, newest first, with profiles"""
        try:
            result = self.supabase.table("idea_volunteers")\
                .select("*")\
                .eq("idea_id", idea_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = result.data or []
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        profiles = ProfileService(self.supabase).get_profiles_map(row.get("user_id") for row in rows)
        return [to_volunteer(row, profiles.get(row.get("user_id"))) for row in rows]

    def get_volunteer_row(self, volunteer_id: str) -> dict:
        result = self.supabase.table("idea_volunteers")\
            .select("*")\
            .eq("id", volunteer_id)\
            .maybe_single()\
            .execute()
        if result is None or not result.data:
            raise HTTPException(status_code=404, detail="Volunteer application not found")
        return result.data

    def apply(self, idea: dict, application: VolunteerApply, user_id: str) -> VolunteerResponse:
        """
        Volunteer for an idea. Creators cannot volunteer for their own idea and a
        pending or approved application blocks another one; a rejected one is reopened.
        """
        if idea.get("created_by") == user_id:
            raise HTTPException(status_code=400, detail="You cannot volunteer for your own idea")
        message = (application.message or "").strip() or None
        skills = list(dict.fromkeys(s.strip() for s in application.skills if s and s.strip()))
        try:
            existing = self.supabase.table("idea_volunteers")\
                .select("*")\
                .eq("idea_id", idea["id"])\
                .eq("user_id", user_id)\
                .execute()

            for row in existing.data or []:
                if normalize_status(row.get("status")) != "rejected":
                    raise HTTPException(status_code=409, detail="You have already volunteered for this idea")

            now = datetime.now(timezone.utc).isoformat()
            if existing.data:
                result = self.supabase.table("idea_volunteers")\
                    .update({
                        "status": "pending",
                        "message": message,
                        "skills": skills,
                        "approved_by": None,
                        "approved_at": None,
                        "updated_at": now
                    })\
                    .eq("id", existing.data[0]["id"])\
                    .execute()
            else:
                result = self.supabase.table("idea_volunteers").insert({
                    "idea_id": idea["id"],
                    "user_id": user_id,
                    "message": message,
                    "skills": skills
                }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit volunteer application")

            if idea.get("created_by"):
                try:
                    NotificationService(self.supabase).create_notification(
                        idea["created_by"], idea["id"],
                        "New volunteer",
                        f'Someone volunteered for "{idea.get("title") or "your idea"}"',
                        "volunteer"
                    )
                except Exception as e:
                    logger.error(f"Error notifying idea owner about volunteer: {e}")

            return to_volunteer(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(self, volunteer: dict, status: str, approver_id: str) -> VolunteerResponse:
        """Approve or reject an application"""
        try:
            now = datetime.now(timezone.utc).isoformat()
            result = self.supabase.table("idea_volunteers")\
                .update({
                    "status": status,
                    "approved_by": approver_id,
                    "approved_at": now,
                    "updated_at": now
                })\
                .eq("id", volunteer["id"])\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Volunteer application not found")

            try:
                NotificationService(self.supabase).create_notification(
                    volunteer["user_id"], volunteer["idea_id"],
                    "Volunteer application update",
                    f"Your volunteer application was {status}",
                    "volunteer"
                )
            except Exception as e:
                logger.error(f"Error notifying volunteer {volunteer['user_id']}: {e}")

            return to_volunteer(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove(self, volunteer_id: str) -> bool:
        """Delete a volunteer application"""
        try:
            result = self.supabase.table("idea_volunteers")\
                .delete()\
                .eq("id", volunteer_id)\
                .execute()
            return len(result.data or []) > 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
