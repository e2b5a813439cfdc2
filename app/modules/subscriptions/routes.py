from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.subscriptions.schemas import SubscribeRequest, EmailPreferencesUpdate, SubscriptionStatus
from app.modules.subscriptions.service import SubscriptionService
from app.core.dependencies import get_current_user_id, get_idea_owner_row
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/ideas/{idea_id}/subscription", tags=["subscriptions"])


def get_subscription_service(supabase: Client = Depends(get_supabase)) -> SubscriptionService:
    return SubscriptionService(supabase)


@router.get("", response_model=SubscriptionStatus)
async def get_subscription(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: SubscriptionService = Depends(get_subscription_service)
):
    return service.get_subscription(idea_id, user_data["id"])


@router.put("", response_model=SubscriptionStatus)
async def subscribe(
    idea_id: str,
    request: Optional[SubscribeRequest] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: SubscriptionService = Depends(get_subscription_service),
    supabase: Client = Depends(get_supabase)
):
    """Follow an idea (in-app notifications, plus email when enabled)"""
    get_idea_owner_row(idea_id, supabase)
    return service.subscribe(idea_id, request or SubscribeRequest(), user_data["id"])


@router.delete("", status_code=204)
async def unsubscribe(
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: SubscriptionService = Depends(get_subscription_service)
):
    service.unsubscribe(idea_id, user_data["id"])
    return None


@router.put("/email", response_model=SubscriptionStatus)
async def update_email_preferences(
    idea_id: str,
    update: EmailPreferencesUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: SubscriptionService = Depends(get_subscription_service)
):
    return service.update_email_preferences(idea_id, update, user_data["id"])
