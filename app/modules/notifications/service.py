from supabase import Client
from app.modules.notifications.schemas import NotificationResponse, NotificationListResponse
from app.config.settings import settings
from typing import Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_notifications(self, user_id: str, limit: Optional[int] = None) -> NotificationListResponse:
        """Latest notifications for a user plus the unread count among them"""
        try:
            result = self.supabase.table("notifications")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(limit or settings.notification_list_limit)\
                .execute()

            notifications = [NotificationResponse(**row) for row in result.data or []]
            unread = sum(1 for n in notifications if not n.is_read)
            return NotificationListResponse(notifications=notifications, unread_count=unread)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_read(self, notification_id: str, user_id: str) -> NotificationResponse:
        """Mark one of the user's notifications as read"""
        try:
            result = self.supabase.table("notifications")\
                .update({"is_read": True})\
                .eq("id", notification_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Notification not found")

            return NotificationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of the user as read. Returns how many changed."""
        try:
            result = self.supabase.table("notifications")\
                .update({"is_read": True})\
                .eq("user_id", user_id)\
                .eq("is_read", False)\
                .execute()
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_notification(
        self,
        user_id: str,
        idea_id: Optional[str],
        title: str,
        message: str,
        notification_type: str = "updates"
    ) -> Optional[str]:
        """Create an in-app notification through the create_notification RPC"""
        result = self.supabase.rpc("create_notification", {
            "p_user_id": user_id,
            "p_idea_id": idea_id,
            "p_title": title,
            "p_message": message,
            "p_type": notification_type,
        }).execute()
        return result.data

    def send_email(self, user_id: str, idea_id: str, subject: str, message: str, notification_type: str):
        self.supabase.rpc("send_idea_notification_email", {
            "p_user_id": user_id,
            "p_idea_id": idea_id,
            "p_subject": subject,
            "p_message": message,
            "p_notification_type": notification_type,
        }).execute()

    def notify_subscribers(
        self,
        idea_id: str,
        actor_id: Optional[str],
        notification_type: str,
        title: str,
        message: str
    ) -> int:
        """
        Fan out a notification to everyone subscribed to an idea except the actor.
        Subscribers whose active email preference includes the type also get an email.
        Returns the number of subscribers notified in-app.
        """
        try:
            subs_result = self.supabase.table("idea_subscriptions")\
                .select("user_id")\
                .eq("idea_id", idea_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading subscribers for idea {idea_id}: {e}")
            return 0

        recipients = list(dict.fromkeys(
            row["user_id"] for row in subs_result.data or []
            if row.get("user_id") and row["user_id"] != actor_id
        ))
        if not recipients:
            return 0

        email_recipients = set()
        if settings.email_notifications_enabled:
            try:
                prefs_result = self.supabase.table("email_preferences")\
                    .select("user_id, notification_types, is_active")\
                    .eq("idea_id", idea_id)\
                    .in_("user_id", recipients)\
                    .execute()
                for pref in prefs_result.data or []:
                    if pref.get("is_active") and notification_type in (pref.get("notification_types") or []):
                        email_recipients.add(pref["user_id"])
            except Exception as e:
                logger.error(f"Error loading email preferences for idea {idea_id}: {e}")

        notified = 0
        for user_id in recipients:
            try:
                self.create_notification(user_id, idea_id, title, message, notification_type)
                notified += 1
                if user_id in email_recipients:
                    self.send_email(user_id, idea_id, title, message, notification_type)
            except Exception as e:
                logger.error(f"Error notifying {user_id} about idea {idea_id}: {e}")

        logger.info(f"Notified {notified} subscriber(s) of idea {idea_id} ({notification_type})")
        return notified
