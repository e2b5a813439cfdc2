# Supabase tables: idea_subscriptions, email_preferences
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

idea_subscriptions:
- id: uuid (primary key)
- idea_id: uuid (foreign key to ideas.id, not null)
- user_id: uuid (not null)
- subscription_type: text (nullable, default: 'all')
- created_at: timestamp (default: now())

email_preferences:
- id: uuid (primary key)
- idea_id: uuid (foreign key to ideas.id, not null)
- user_id: uuid (not null)
- notification_types: text[] (nullable) - subset of status_change, comments, updates
- is_active: boolean (default: true)
- created_at: timestamp (default: now())
"""
