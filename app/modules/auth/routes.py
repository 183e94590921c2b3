from fastapi import APIRouter, Depends, Request
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import (
    LoginRequest, PhoneOtpRequest, PhoneVerifyRequest, SignupRequest,
    TokenResponse, OtpSentResponse, SignupResponse
)
from app.modules.auth.service import AuthService
from app.core.dependencies import get_auth_service, get_admin_supabase, get_current_token, get_current_session
from app.core.rate_limit import limiter
from app.core.session import AuthSession
from app.config import settings
from supabase import Client

router = APIRouter(prefix="/auth", tags=["auth"])


def get_signup_service(
    supabase: Client = Depends(get_supabase),
    admin: Client = Depends(get_admin_supabase)
) -> AuthService:
    return AuthService(supabase, admin)


@router.post("/signup", response_model=SignupResponse, status_code=201)
@limiter.limit(settings.auth_rate_limit)
async def signup(
    request: Request,
    signup_data: SignupRequest,
    service: AuthService = Depends(get_signup_service)
):
    """Create auth user and profile together; the user must confirm their email"""
    return service.signup(signup_data)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login with email and password"""
    return service.login(login_data)


@router.post("/phone/send-otp", response_model=OtpSentResponse)
@limiter.limit(settings.auth_rate_limit)
async def send_phone_otp(
    request: Request,
    otp_data: PhoneOtpRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send an SMS sign-in code to a US phone number"""
    return service.send_phone_otp(otp_data)


@router.post("/phone/verify", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
async def verify_phone_otp(
    request: Request,
    verify_data: PhoneVerifyRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange an SMS code for an access token"""
    return service.verify_phone_otp(verify_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_current_user(
    session: AuthSession = Depends(get_current_session)
):
    """Current user, linked profile, role and permissions (for frontend UI)."""
    return session.to_dict()
