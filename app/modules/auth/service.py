import hashlib
import logging
import re
import time
from supabase import Client
from app.modules.auth.schemas import (
    LoginRequest, PhoneOtpRequest, PhoneVerifyRequest, SignupRequest,
    TokenResponse, OtpSentResponse, SignupResponse
)
from app.modules.identity.deriver import resolve_identity
from app.modules.profiles.service import ProfileService
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500

# Tokens signed out through this service; rejected until their JWT would have expired anyway
_REVOKED_TOKENS: Dict[str, float] = {}
_REVOKED_TTL_SEC = 3600
_REVOKED_MAX_SIZE = 5000


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _revoke(cache_key: str) -> None:
    now = time.monotonic()
    for key, revoked_until in list(_REVOKED_TOKENS.items()):
        if revoked_until <= now:
            del _REVOKED_TOKENS[key]
    if len(_REVOKED_TOKENS) >= _REVOKED_MAX_SIZE:
        # Full: drop the entry closest to expiry
        del _REVOKED_TOKENS[min(_REVOKED_TOKENS, key=_REVOKED_TOKENS.get)]
    _REVOKED_TOKENS[cache_key] = now + _REVOKED_TTL_SEC


def format_us_phone(phone: str, country_code: Optional[str] = None) -> str:
    """"(555) 123-4567" -> "+15551234567"; numbers already carrying the code pass through"""
    country_code = country_code or settings.phone_country_code
    phone = phone.strip()
    if phone.startswith(country_code):
        return phone
    digits = re.sub(r"\D", "", phone)
    if not digits:
        raise HTTPException(status_code=400, detail="Invalid phone number")
    return f"{country_code}{digits}"


class AuthService:
    def __init__(self, supabase: Client, admin: Optional[Client] = None):
        self.supabase = supabase
        self.admin = admin or supabase

    def signup(self, signup_data: SignupRequest) -> SignupResponse:
        """Self-signup: auth user (email unconfirmed) plus profile, created together"""
        if signup_data.confirm_password is not None and signup_data.password != signup_data.confirm_password:
            raise HTTPException(status_code=400, detail="Passwords do not match")

        identity = resolve_identity(
            signup_data.first_name,
            signup_data.last_name,
            signup_data.display_name,
            signup_data.username,
        )
        record = signup_data.model_dump(exclude={"password", "confirm_password"}, exclude_none=True)
        record["display_name"] = identity.display_name
        record["username"] = identity.username

        profile = ProfileService(self.admin, self.admin).provision_account(
            record, signup_data.password, email_confirm=False
        )
        return SignupResponse(
            user_id=profile.auth_id or "",
            email=signup_data.email,
            message="Account created successfully. Please check your email to verify your account.",
            profile=profile
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def send_phone_otp(self, otp_data: PhoneOtpRequest) -> OtpSentResponse:
        """Send a one-time SMS code to a US phone number"""
        phone = format_us_phone(otp_data.phone)
        try:
            self.supabase.auth.sign_in_with_otp({"phone": phone})
        except Exception as e:
            logger.error(f"OTP send failed for {phone}: {e}")
            raise HTTPException(status_code=400, detail=f"Failed to send code: {e}")
        return OtpSentResponse(phone=phone, message="Verification code sent")

    def verify_phone_otp(self, verify_data: PhoneVerifyRequest) -> TokenResponse:
        phone = format_us_phone(verify_data.phone)
        try:
            auth_response = self.supabase.auth.verify_otp({
                "phone": phone,
                "token": verify_data.token,
                "type": "sms"
            })
        except Exception as e:
            logger.info(f"OTP verification failed for {phone}: {e}")
            raise HTTPException(status_code=401, detail="Invalid or expired code")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid or expired code")
        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email,
            phone=auth_response.user.phone or phone
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        cache_key = _token_key(token)
        now = time.monotonic()
        revoked_until = _REVOKED_TOKENS.get(cache_key)
        if revoked_until is not None:
            if now < revoked_until:
                raise HTTPException(status_code=401, detail="Session has been signed out")
            del _REVOKED_TOKENS[cache_key]
        try:
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "phone": user.phone,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Sign out and invalidate the session for this token"""
        # Only a live session can be signed out; rejects unknown or already revoked tokens
        self.get_current_user(token)
        cache_key = _token_key(token)
        _AUTH_USER_CACHE.pop(cache_key, None)
        _revoke(cache_key)
        try:
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Supabase sign_out failed: {e}")
            return False
