from fastapi import APIRouter, Depends, HTTPException, status
from app.modules.profiles.schemas import (
    ProfileCreate, ProfileUpdate, ProfileSelfUpdate, ProfileResponse,
    UsernameAvailability, EmailAvailability
)
from app.modules.profiles.service import ProfileService
from app.core.dependencies import (
    get_current_session, get_profile_service, require_permission
)
from app.core.errors import to_http_exception
from app.core.session import AuthSession
from typing import List, Optional

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/check-username", response_model=UsernameAvailability)
async def check_username(
    username: Optional[str] = None,
    exclude_id: Optional[int] = None,
    service: ProfileService = Depends(get_profile_service)
):
    """Advisory: is the username free (ignoring profile exclude_id when editing)?"""
    if not username:
        raise HTTPException(status_code=400, detail="Username is required")
    try:
        available = service.is_username_available(username, exclude_id)
    except Exception as e:
        raise to_http_exception(e, "Profile")
    return UsernameAvailability(available=available, username=username)


@router.get("/check-email", response_model=EmailAvailability)
async def check_email(
    email: Optional[str] = None,
    exclude_id: Optional[int] = None,
    service: ProfileService = Depends(get_profile_service)
):
    """Advisory: is the email free (ignoring profile exclude_id when editing)?"""
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    try:
        available = service.is_email_available(email, exclude_id)
    except Exception as e:
        raise to_http_exception(e, "Profile")
    return EmailAvailability(available=available, email=email)


@router.get("/me", response_model=ProfileResponse)
async def get_own_profile(session: AuthSession = Depends(get_current_session)):
    """Profile of the signed-in user"""
    if not session.profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileResponse(**session.profile)


@router.put("/me", response_model=ProfileResponse)
async def update_own_profile(
    profile_data: ProfileSelfUpdate,
    session: AuthSession = Depends(get_current_session),
    service: ProfileService = Depends(get_profile_service)
):
    """Settings page: names, address, phone and DUPR ratings of the signed-in user"""
    if not session.profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return service.update_own_profile(session.user_id, profile_data)


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(
    limit: int = 100,
    offset: int = 0,
    session: AuthSession = Depends(require_permission("profiles:read")),
    service: ProfileService = Depends(get_profile_service)
):
    return service.list_profiles(limit=limit, offset=offset)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: int,
    session: AuthSession = Depends(require_permission("profiles:read")),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_profile_by_id(profile_id)


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(
    profile_data: ProfileCreate,
    session: AuthSession = Depends(require_permission("profiles:create")),
    service: ProfileService = Depends(get_profile_service)
):
    """Create a profile; when a password is given the auth user is created too"""
    return service.create_profile(profile_data)


@router.put("/{profile_id}", response_model=ProfileResponse)
async def update_profile(
    profile_id: int,
    profile_data: ProfileUpdate,
    session: AuthSession = Depends(require_permission("profiles:update")),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(profile_id, profile_data)


@router.delete("/{profile_id}", status_code=status.HTTP_200_OK)
async def delete_profile(
    profile_id: int,
    session: AuthSession = Depends(require_permission("profiles:delete")),
    service: ProfileService = Depends(get_profile_service)
):
    """Delete a profile and its auth user"""
    service.delete_profile(profile_id)
    return {"message": "Profile deleted successfully"}
