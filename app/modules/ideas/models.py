# Supabase tables: ideas, likes, idea_activity
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

ideas:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- business_unit: text (nullable)
- techstack: text[] (nullable)
- tags: text[] (nullable)
- status: text (nullable, default: 'draft')
- priority_level: text (nullable, default: 'medium')
- progress_percentage: integer (nullable, 0-100)
- expected_start_date: date (nullable)
- expected_end_date: date (nullable)
- assigned_to: uuid[] (nullable)
- forwarded_to: uuid[] (nullable)
- created_by: uuid (foreign key to auth.users.id)
- created_at: timestamp (default: now())

likes:
- idea_id: uuid (foreign key to ideas.id, not null)
- user_id: uuid (not null)
- primary key on (idea_id, user_id)

idea_activity:
- id: uuid (primary key)
- idea_id: uuid (foreign key to ideas.id, not null)
- user_id: uuid (not null)
- action_type: text (not null) - idea_created, idea_updated, status_changed
- description: text (not null)
- metadata: jsonb (nullable)
- created_at: timestamp (default: now())

RPC log_idea_activity(p_idea_id, p_user_id, p_action_type, p_description, p_metadata) -> uuid
Child rows (likes, comments, volunteers, teams, ...) are removed by ON DELETE CASCADE.
"""
