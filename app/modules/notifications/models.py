# Supabase tables: notifications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

notifications:
- id: uuid (primary key)
- user_id: uuid (recipient, not null)
- idea_id: uuid (foreign key to ideas.id, nullable)
- title: text (not null)
- message: text (not null)
- type: text (nullable) - status_change, comments, updates, volunteer, ...
- is_read: boolean (default: false)
- created_at: timestamp (default: now())

RPCs:
- create_notification(p_user_id, p_idea_id, p_title, p_message, p_type) -> uuid
- send_idea_notification_email(p_user_id, p_idea_id, p_subject, p_message, p_notification_type) -> uuid
"""
