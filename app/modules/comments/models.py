# Supabase tables: comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

comments:
- id: uuid (primary key)
- idea_id: uuid (foreign key to ideas.id)
- user_id: uuid (author)
- parent_comment_id: uuid (foreign key to comments.id, nullable) - null for top-level comments
- text: text
- created_at: timestamp (default: now())
"""
