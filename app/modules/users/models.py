# Supabase tables: auth.users, profiles, user_roles
# This module owns no table of its own; it provisions an auth user,
# its profile and (optionally) its first role assignment in one request.
