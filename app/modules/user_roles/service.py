from supabase import Client
from app.core.errors import to_http_exception
from app.modules.user_roles.schemas import UserRoleCreate, UserRoleUpdate, UserRoleResponse
from typing import List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class UserRoleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_user_roles(
        self,
        user_id: Optional[int] = None,
        org_id: Optional[str] = None,
        location_id: Optional[str] = None
    ) -> List[UserRoleResponse]:
        """List role assignments ordered by id, filtered by any of user/org/location"""
        try:
            query = self.supabase.table("user_roles").select("*")
            if user_id is not None:
                query = query.eq("user_id", user_id)
            if org_id:
                query = query.eq("org_id", org_id)
            if location_id:
                query = query.eq("location_id", location_id)
            result = query.order("id").execute()
            return [UserRoleResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error listing user roles: {e}")
            raise to_http_exception(e, "User role")

    def get_user_role_by_id(self, user_role_id: int) -> UserRoleResponse:
        try:
            result = self.supabase.table("user_roles")\
                .select("*")\
                .eq("id", user_role_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="User role not found")
            return UserRoleResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "User role")

    def create_user_role(self, user_role_data: UserRoleCreate) -> UserRoleResponse:
        try:
            result = self.supabase.table("user_roles")\
                .insert(user_role_data.model_dump())\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create user role")
            return UserRoleResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "User role")

    def update_user_role(self, user_role_id: int, user_role_data: UserRoleUpdate) -> UserRoleResponse:
        update_data = user_role_data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("user_roles")\
                .update(update_data)\
                .eq("id", user_role_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="User role not found")
            return UserRoleResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "User role")

    def delete_user_role(self, user_role_id: int) -> bool:
        try:
            result = self.supabase.table("user_roles")\
                .delete()\
                .eq("id", user_role_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="User role not found")
            return True
        except Exception as e:
            raise to_http_exception(e, "User role")
