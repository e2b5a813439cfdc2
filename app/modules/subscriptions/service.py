from supabase import Client
from app.modules.subscriptions.schemas import SubscribeRequest, EmailPreferencesUpdate, SubscriptionStatus
from app.config.board_options import NOTIFICATION_TYPES
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_subscription(self, idea_id: str, user_id: str) -> SubscriptionStatus:
        """Subscription flag plus email preferences; types default to all when no preference row exists"""
        try:
            subscription = self.supabase.table("idea_subscriptions")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()
            preferences = self.supabase.table("email_preferences")\
                .select("notification_types, is_active")\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()

            if preferences.data:
                pref = preferences.data[0]
                return SubscriptionStatus(
                    idea_id=idea_id,
                    subscribed=bool(subscription.data),
                    email_enabled=bool(pref.get("is_active")),
                    notification_types=pref.get("notification_types") or [],
                )
            return SubscriptionStatus(
                idea_id=idea_id,
                subscribed=bool(subscription.data),
                email_enabled=False,
                notification_types=list(NOTIFICATION_TYPES),
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def subscribe(self, idea_id: str, request: SubscribeRequest, user_id: str) -> SubscriptionStatus:
        """Subscribe to an idea; re-subscribing replaces the email preferences"""
        try:
            existing = self.supabase.table("idea_subscriptions")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()
            if not existing.data:
                self.supabase.table("idea_subscriptions").insert({
                    "user_id": user_id,
                    "idea_id": idea_id,
                    "subscription_type": "all"
                }).execute()

            self.supabase.table("email_preferences")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()
            if request.email_enabled:
                self.supabase.table("email_preferences").insert({
                    "user_id": user_id,
                    "idea_id": idea_id,
                    "notification_types": request.notification_types,
                    "is_active": True
                }).execute()

            logger.info(f"User {user_id} subscribed to idea {idea_id}")
            return self.get_subscription(idea_id, user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def unsubscribe(self, idea_id: str, user_id: str) -> bool:
        """Remove the subscription and the email preferences"""
        try:
            self.supabase.table("idea_subscriptions")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()
            self.supabase.table("email_preferences")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()
            return True
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_email_preferences(self, idea_id: str, update: EmailPreferencesUpdate, user_id: str) -> SubscriptionStatus:
        """Change which notification types are emailed; requires a subscription"""
        try:
            subscription = self.supabase.table("idea_subscriptions")\
                .select("id")\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()
            if not subscription.data:
                raise HTTPException(status_code=400, detail="Subscribe to the idea before setting email preferences")

            result = self.supabase.table("email_preferences")\
                .update({
                    "notification_types": update.notification_types,
                    "is_active": update.is_active
                })\
                .eq("user_id", user_id)\
                .eq("idea_id", idea_id)\
                .execute()
            if not result.data:
                self.supabase.table("email_preferences").insert({
                    "user_id": user_id,
                    "idea_id": idea_id,
                    "notification_types": update.notification_types,
                    "is_active": update.is_active
                }).execute()

            return self.get_subscription(idea_id, user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
