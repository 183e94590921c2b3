# Supabase table: courts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

courts:
- court_id: bigint (primary key, identity)
- name: text (not null)
- description: text (nullable)
- type: court_type enum ('indoor', 'outdoor', 'covered'), default 'indoor'
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""
