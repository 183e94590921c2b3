from supabase import Client
from app.core.session import AuthSession
from app.modules.identity.deriver import resolve_identity
from app.modules.profiles.service import ProfileService
from app.modules.users.schemas import UserCreate, UserCreateResponse
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

ELEVATED_ROLES = ("staff", "admin")


class UserService:
    def __init__(self, admin: Client):
        self.admin = admin

    def create_user(self, creator: AuthSession, user_data: UserCreate) -> UserCreateResponse:
        """Create an auth user (email confirmed), its profile and role assignment"""
        # Staff can only create users, not staff or admins
        if not creator.is_admin and user_data.role in ELEVATED_ROLES:
            raise HTTPException(status_code=403, detail="Staff cannot create admin or staff users")
        has_scope = bool(user_data.org_id and user_data.location_id)
        if user_data.role in ELEVATED_ROLES and not has_scope:
            raise HTTPException(
                status_code=400,
                detail="org_id and location_id are required to assign a staff or admin role"
            )

        identity = resolve_identity(
            user_data.first_name, user_data.last_name, user_data.display_name, user_data.username
        )
        record = user_data.model_dump(
            exclude={"password", "role", "org_id", "location_id"}, exclude_none=True
        )
        record["display_name"] = identity.display_name
        record["username"] = identity.username

        profile = ProfileService(self.admin, self.admin).provision_account(
            record, user_data.password, email_confirm=True
        )

        role_assigned = False
        if has_scope:
            try:
                self.admin.table("user_roles").insert({
                    "user_id": profile.id,
                    "org_id": user_data.org_id,
                    "location_id": user_data.location_id,
                    "role": user_data.role
                }).execute()
                role_assigned = True
            except Exception as e:
                # The account exists; the role can be assigned later
                logger.error(f"Role assignment failed for profile {profile.id}: {e}")

        return UserCreateResponse(
            user_id=profile.auth_id or "",
            profile_id=profile.id,
            email=user_data.email,
            role=user_data.role,
            role_assigned=role_assigned
        )
