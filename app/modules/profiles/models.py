# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: bigint (primary key, identity)
- auth_id: uuid (nullable, references auth.users.id)
- username: text (unique)
- email: text (unique)
- phone: text (nullable)
- first_name: text
- last_name: text
- display_name: text
- address: text (nullable)
- suite: text (nullable)
- city: text (nullable)
- state: text (nullable)
- zip: text (nullable)
- dupr_score_singles: numeric (nullable)
- dupr_score_doubles: numeric (nullable)
- dupr_type: dupr_type enum ('default', 'api', 'self', 'instructor')
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Profiles created with a password get an auth.users row first (admin API);
its id is stored in auth_id. DUPR scores are stored, never computed here.
"""
