"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.session import AuthSession
from app.database.supabase_client import SupabaseClient, get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_admin_supabase() -> Client:
    """Service-role client; admin API calls are refused without one"""
    if not SupabaseClient.has_service_client():
        raise HTTPException(
            status_code=500,
            detail="Admin client not configured. Check SUPABASE_SERVICE_ROLE_KEY environment variable."
        )
    return get_service_supabase()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_profile_service(
    supabase: Client = Depends(get_supabase),
    admin: Client = Depends(get_service_supabase)
) -> ProfileService:
    return ProfileService(supabase, admin)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_user_roles(profile_id: Optional[int], supabase: Client) -> List[str]:
    """Distinct roles held by a profile across all orgs/locations"""
    if profile_id is None:
        return []
    try:
        result = supabase.table("user_roles")\
            .select("role")\
            .eq("user_id", profile_id)\
            .execute()
        return sorted({r["role"] for r in result.data}) if result.data else []
    except Exception as e:
        logger.error(f"Error getting user roles: {e}")
        return []


def get_current_session(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_service_supabase)
) -> AuthSession:
    """Build the caller's AuthSession: auth user, linked profile and roles"""
    user_data = auth_service.get_current_user(token)
    profile = None
    try:
        profile = ProfileService(supabase).get_profile_by_auth_id(user_data["id"])
    except Exception as e:
        logger.error(f"Error fetching profile for {user_data['id']}: {e}")
    roles = get_user_roles(profile["id"] if profile else None, supabase)
    return AuthSession(token=token, user=user_data, profile=profile, roles=roles)


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(
        session: AuthSession = Depends(get_current_session)
    ) -> AuthSession:
        """Dependency to check if user has required permission"""
        if not session.has_permission(required_permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return session
    return check_permission


def require_admin(session: AuthSession = Depends(get_current_session)) -> AuthSession:
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions - admin required"
        )
    return session

