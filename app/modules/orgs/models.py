# Supabase table: orgs
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

orgs:
- id: text (primary key)
- name: text (not null)
- description: text (nullable)
- street: text (not null)
- suite: text (nullable)
- city: text (not null)
- state: text (not null)
- zip: text (not null)
- phone: text (nullable)
- web_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
