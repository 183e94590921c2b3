# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - Email/password sign-in and SMS one-time codes
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.admin.create_user() - Register users server-side (self-signup and admin-created)
- auth.sign_in_with_password() - Authenticate with email and password
- auth.sign_in_with_otp() - Send an SMS code to a phone number
- auth.verify_otp() - Exchange an SMS code for a session
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Every signed-up user also gets a row in public.profiles (see modules/profiles)
linked through profiles.auth_id.
"""
