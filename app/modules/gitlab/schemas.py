from pydantic import BaseModel, model_validator
from typing import Optional, Any
from datetime import datetime


class GitlabIntegrationCreate(BaseModel):
    gitlab_project_id: str
    gitlab_project_url: str
    access_token: Optional[str] = None

    @model_validator(mode="after")
    def validate_project(self):
        if not self.gitlab_project_id.strip():
            raise ValueError("gitlab_project_id is required")
        if not self.gitlab_project_url.strip().startswith(("http://", "https://")):
            raise ValueError("gitlab_project_url must be an http(s) URL")
        return self


class GitlabIntegrationResponse(BaseModel):
    id: str
    idea_id: str
    gitlab_project_id: str
    gitlab_project_url: str
    total_issues: int = 0
    closed_issues: int = 0
    last_sync_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GitlabSyncResponse(BaseModel):
    integration: GitlabIntegrationResponse
    result: Optional[Any] = None
