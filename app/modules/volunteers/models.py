# Supabase tables: idea_volunteers
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

idea_volunteers:
- id: uuid (primary key)
- idea_id: uuid (foreign key to ideas.id, not null)
- user_id: uuid (not null)
- status: text (not null, default: 'pending') - values: pending, approved, rejected
- message: text (nullable)
- skills: jsonb (nullable) - list of strings; older rows may hold a JSON-encoded string
- approved_by: uuid (nullable)
- approved_at: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
