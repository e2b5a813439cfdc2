# Supabase tables: idea_gitlab_integration
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

idea_gitlab_integration:
- id: uuid (primary key)
- idea_id: uuid (foreign key to ideas.id, unique, not null) - one integration per idea
- gitlab_project_id: text (not null)
- gitlab_project_url: text (not null)
- access_token_encrypted: text (nullable) - never returned by the API
- total_issues: integer (default: 0)
- closed_issues: integer (default: 0)
- last_sync_at: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

RPCs:
- sync_gitlab_issues(p_idea_id) -> jsonb - pulls issue counts from GitLab
- update_idea_progress_from_gitlab(p_idea_id) - sets ideas.progress_percentage from closed/total
"""
