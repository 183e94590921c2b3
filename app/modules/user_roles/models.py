# Supabase table: user_roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

user_roles:
- id: bigint (primary key, identity)
- user_id: bigint (foreign key to profiles.id, not null)
- org_id: text (foreign key to orgs.id, not null)
- location_id: text (foreign key to locations.id, not null)
- role: user_role enum ('member', 'staff', 'admin')
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

A profile's effective role is the highest role across its rows
(see config/permissions_config.py).
"""
