"""
Per-request identity of the caller, built from the bearer token and injected
into route handlers by `get_current_session`.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.config.permissions_config import all_permissions, get_role_permissions, highest_role


@dataclass
class AuthSession:
    token: str
    user: Dict[str, Any]
    profile: Optional[Dict[str, Any]] = None
    roles: List[str] = field(default_factory=list)

    @property
    def user_id(self) -> str:
        return self.user["id"]

    @property
    def profile_id(self) -> Optional[int]:
        return self.profile.get("id") if self.profile else None

    @property
    def role(self) -> Optional[str]:
        return highest_role(self.roles)

    @property
    def is_super_user(self) -> bool:
        # app_metadata is set server-side and cannot be modified by users
        app_metadata = self.user.get("app_metadata") or {}
        return app_metadata.get("type") == "super_user"

    @property
    def is_admin(self) -> bool:
        return self.is_super_user or self.role == "admin"

    @property
    def is_staff(self) -> bool:
        return self.role == "staff"

    @property
    def can_manage_users(self) -> bool:
        return self.is_admin or self.is_staff

    @property
    def permissions(self) -> List[str]:
        if self.is_super_user:
            return all_permissions()
        return get_role_permissions(self.role)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.user,
            "profile": self.profile,
            "role": self.role,
            "is_admin": self.is_admin,
            "is_staff": self.is_staff,
            "can_manage_users": self.can_manage_users,
            "permissions": self.permissions,
        }
