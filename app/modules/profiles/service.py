from supabase import Client
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse, ProfileSummary
from typing import Dict, Iterable
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by user ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if result is None or not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update profile (full name is trimmed; blank clears it)"""
        try:
            update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
            if profile_data.full_name is not None:
                update_data["full_name"] = profile_data.full_name.strip() or None
            if profile_data.avatar_url is not None:
                update_data["avatar_url"] = profile_data.avatar_url.strip() or None

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_profiles_map(self, user_ids: Iterable[str]) -> Dict[str, ProfileSummary]:
        """Fetch profiles for many users in one query. Failures degrade to an empty map."""
        ids = list(dict.fromkeys(uid for uid in user_ids if uid))
        if not ids:
            return {}
        try:
            result = self.supabase.table("profiles")\
                .select("id, full_name, email, avatar_url")\
                .in_("id", ids)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching profiles: {e}")
            return {}
        profiles = {}
        for row in result.data or []:
            profiles[row["id"]] = ProfileSummary(
                full_name=row.get("full_name"),
                email=row.get("email"),
                avatar_url=row.get("avatar_url"),
            )
        return profiles
