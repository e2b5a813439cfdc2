# Supabase Auth + user_roles
# Identity is handled by Supabase Auth; the admin flag lives in user_roles

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (a trigger creates the profiles row)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

user_roles:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- role: app_role enum ('admin' | 'user', default: 'user')

RPC is_admin(user_id) returns true when a user_roles row with role 'admin' exists.
"""
