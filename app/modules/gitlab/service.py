from supabase import Client
from app.modules.gitlab.schemas import GitlabIntegrationCreate, GitlabIntegrationResponse, GitlabSyncResponse
from typing import Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def to_integration(row: dict) -> GitlabIntegrationResponse:
    data = {k: v for k, v in row.items() if k != "access_token_encrypted"}
    data["total_issues"] = data.get("total_issues") or 0
    data["closed_issues"] = data.get("closed_issues") or 0
    return GitlabIntegrationResponse(**data)


class GitlabService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_integration(self, idea_id: str) -> Optional[GitlabIntegrationResponse]:
        """GitLab integration of an idea, or None"""
        try:
            result = self.supabase.table("idea_gitlab_integration")\
                .select("*")\
                .eq("idea_id", idea_id)\
                .maybe_single()\
                .execute()
            if result is None or not result.data:
                return None
            return to_integration(result.data)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_integration(self, idea_id: str, data: GitlabIntegrationCreate) -> GitlabIntegrationResponse:
        """Link an idea to a GitLab project (one per idea)"""
        if self.get_integration(idea_id) is not None:
            raise HTTPException(status_code=409, detail="Idea already has a GitLab integration")
        try:
            result = self.supabase.table("idea_gitlab_integration").insert({
                "idea_id": idea_id,
                "gitlab_project_id": data.gitlab_project_id.strip(),
                "gitlab_project_url": data.gitlab_project_url.strip(),
                "access_token_encrypted": data.access_token or None
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create GitLab integration")

            logger.info(f"GitLab project {data.gitlab_project_id} linked to idea {idea_id}")
            return to_integration(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def sync(self, idea_id: str) -> GitlabSyncResponse:
        """Sync issue counts, then derive idea progress from them"""
        if self.get_integration(idea_id) is None:
            raise HTTPException(status_code=404, detail="GitLab integration not found")
        try:
            sync_result = self.supabase.rpc("sync_gitlab_issues", {"p_idea_id": idea_id}).execute()
            self.supabase.rpc("update_idea_progress_from_gitlab", {"p_idea_id": idea_id}).execute()
        except Exception as e:
            logger.error(f"GitLab sync failed for idea {idea_id}: {e}")
            raise HTTPException(status_code=502, detail=f"GitLab sync failed: {str(e)}")

        integration = self.get_integration(idea_id)
        if integration is None:
            raise HTTPException(status_code=404, detail="GitLab integration not found")
        return GitlabSyncResponse(integration=integration, result=sync_result.data)

    def remove_integration(self, idea_id: str) -> bool:
        """Unlink the GitLab project"""
        try:
            result = self.supabase.table("idea_gitlab_integration")\
                .delete()\
                .eq("idea_id", idea_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="GitLab integration not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
