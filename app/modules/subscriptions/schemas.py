from pydantic import BaseModel, model_validator
from typing import List, Optional
from app.config.board_options import NOTIFICATION_TYPES


def _check_types(types: Optional[List[str]]):
    unknown = [t for t in types or [] if t not in NOTIFICATION_TYPES]
    if unknown:
        raise ValueError(f"Unknown notification types: {', '.join(unknown)}")


class SubscribeRequest(BaseModel):
    email_enabled: bool = True
    notification_types: List[str] = list(NOTIFICATION_TYPES)

    @model_validator(mode="after")
    def validate_types(self):
        _check_types(self.notification_types)
        return self


class EmailPreferencesUpdate(BaseModel):
    notification_types: List[str]
    is_active: bool = True

    @model_validator(mode="after")
    def validate_types(self):
        _check_types(self.notification_types)
        return self


class SubscriptionStatus(BaseModel):
    idea_id: str
    subscribed: bool
    email_enabled: bool
    notification_types: List[str]
