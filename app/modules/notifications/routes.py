from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.notifications.schemas import (
    NotificationResponse, NotificationListResponse, MarkAllReadResponse
)
from app.modules.notifications.service import NotificationService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    limit: Optional[int] = Query(None, ge=1, le=100),
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Latest notifications of the current user with unread count"""
    return service.list_notifications(user_data["id"], limit)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    return MarkAllReadResponse(updated=service.mark_all_read(user_data["id"]))


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    return service.mark_read(notification_id, user_data["id"])
