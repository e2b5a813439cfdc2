# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (nullable) - synced from auth.users by a signup trigger
- full_name: text (nullable) - seeded from user_metadata.full_name
- avatar_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
