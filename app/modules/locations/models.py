# Supabase table: locations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

locations:
- id: text (primary key)
- org_id: text (foreign key to orgs.id, not null)
- name: text (not null)
- description: text (nullable)
- street, suite, city, state, zip: text (suite nullable)
- phone: text (nullable)
- web_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
