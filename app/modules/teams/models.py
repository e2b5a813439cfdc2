# Supabase tables: idea_teams, team_members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

idea_teams:
- id: uuid (primary key)
- idea_id: uuid (foreign key to ideas.id, not null)
- name: text (not null)
- description: text (nullable)
- created_by: uuid (not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

team_members:
- id: uuid (primary key)
- team_id: uuid (foreign key to idea_teams.id, not null)
- user_id: uuid (not null)
- role: text (nullable) - values: leader, member
- joined_at: timestamp (default: now())
"""
