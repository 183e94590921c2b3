from supabase import Client
from app.core.errors import to_http_exception
from app.modules.identity.deriver import resolve_identity
from app.modules.profiles.schemas import (
    ProfileCreate, ProfileUpdate, ProfileSelfUpdate, ProfileResponse
)
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client, admin: Optional[Client] = None):
        self.supabase = supabase
        # service_role client for auth.admin calls and RLS-free lookups
        self.admin = admin or supabase

    def is_username_available(self, username: str, exclude_id: Optional[int] = None) -> bool:
        """True when no profile other than exclude_id holds this username"""
        query = self.admin.table("profiles")\
            .select("id")\
            .eq("username", username)
        if exclude_id is not None:
            query = query.neq("id", exclude_id)
        result = query.limit(1).execute()
        return not result.data

    def is_email_available(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """True when no profile other than exclude_id holds this email"""
        query = self.admin.table("profiles")\
            .select("id")\
            .eq("email", email)
        if exclude_id is not None:
            query = query.neq("id", exclude_id)
        result = query.limit(1).execute()
        return not result.data

    def list_profiles(self, limit: int = 100, offset: int = 0) -> List[ProfileResponse]:
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("id")\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [ProfileResponse(**profile) for profile in result.data]
        except Exception as e:
            raise to_http_exception(e, "Profile")

    def get_profile_by_id(self, profile_id: int) -> ProfileResponse:
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", profile_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")
            return ProfileResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Profile")

    def get_profile_by_auth_id(self, auth_id: str) -> Optional[Dict[str, Any]]:
        """Raw profile row linked to a Supabase auth user, or None"""
        result = self.admin.table("profiles")\
            .select("*")\
            .eq("auth_id", auth_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def create_profile(self, profile_data: ProfileCreate) -> ProfileResponse:
        """Create a profile; with a password, create its auth user (email confirmed) first"""
        if profile_data.password and profile_data.password != profile_data.confirm_password:
            raise HTTPException(status_code=400, detail="Passwords do not match")
        record = self._build_record(profile_data)
        if profile_data.password:
            return self.provision_account(record, profile_data.password, email_confirm=True)
        return self._insert(record, self.supabase)

    def provision_account(self, record: Dict[str, Any], password: str, email_confirm: bool) -> ProfileResponse:
        """Create an auth user and its profile; the auth user is removed if the profile insert fails"""
        try:
            auth_response = self.admin.auth.admin.create_user({
                "email": record["email"],
                "password": password,
                "email_confirm": email_confirm,
                "user_metadata": {
                    "username": record.get("username"),
                    "first_name": record.get("first_name"),
                    "last_name": record.get("last_name"),
                }
            })
        except Exception as e:
            logger.error(f"Auth user creation error: {e}")
            raise HTTPException(status_code=400, detail=f"Failed to create auth user: {e}")
        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to create auth user")

        auth_id = auth_response.user.id
        try:
            return self._insert({**record, "auth_id": auth_id}, self.admin)
        except HTTPException:
            try:
                self.admin.auth.admin.delete_user(auth_id)
            except Exception as cleanup_error:
                logger.error(f"Failed to remove auth user {auth_id} after profile error: {cleanup_error}")
            raise

    def update_profile(self, profile_id: int, profile_data: ProfileUpdate) -> ProfileResponse:
        update_data = profile_data.model_dump(exclude_unset=True)
        self._fill_identity(update_data, self.supabase, "id", profile_id)
        return self._update(self.supabase.table("profiles"), update_data, "id", profile_id)

    def update_own_profile(self, auth_id: str, profile_data: ProfileSelfUpdate) -> ProfileResponse:
        update_data = profile_data.model_dump(exclude_unset=True)
        self._fill_identity(update_data, self.admin, "auth_id", auth_id)
        return self._update(self.admin.table("profiles"), update_data, "auth_id", auth_id)

    def _fill_identity(self, update_data: Dict[str, Any], client: Client, key: str, value) -> None:
        """Re-derive username/display_name submitted empty, as on create"""
        cleared = [f for f in ("username", "display_name") if f in update_data and not update_data[f]]
        if not cleared:
            return
        first_name = update_data.get("first_name")
        last_name = update_data.get("last_name")
        if first_name is None or last_name is None:
            try:
                result = client.table("profiles")\
                    .select("first_name, last_name")\
                    .eq(key, value)\
                    .execute()
            except Exception as e:
                raise to_http_exception(e, "Profile")
            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")
            stored = result.data[0]
            if first_name is None:
                first_name = stored.get("first_name")
            if last_name is None:
                last_name = stored.get("last_name")

        identity = resolve_identity(first_name, last_name)
        for field in cleared:
            derived = getattr(identity, field)
            if derived:
                update_data[field] = derived
            else:
                # Nothing to derive from; keep the stored value
                del update_data[field]

    def delete_profile(self, profile_id: int) -> bool:
        """Delete the profile, then its auth user on a best-effort basis"""
        try:
            existing = self.supabase.table("profiles")\
                .select("auth_id")\
                .eq("id", profile_id)\
                .execute()
            if not existing.data:
                raise HTTPException(status_code=404, detail="Profile not found")
            auth_id = existing.data[0].get("auth_id")

            self.supabase.table("profiles")\
                .delete()\
                .eq("id", profile_id)\
                .execute()
        except Exception as e:
            raise to_http_exception(e, "Profile")

        if auth_id:
            try:
                self.admin.auth.admin.delete_user(auth_id)
            except Exception as e:
                # Profile is already gone; the request still succeeds
                logger.error(f"Failed to delete auth user {auth_id}: {e}")
        return True

    def _build_record(self, profile_data: ProfileCreate) -> Dict[str, Any]:
        record = profile_data.model_dump(exclude={"password", "confirm_password"}, exclude_none=True)
        identity = resolve_identity(
            profile_data.first_name,
            profile_data.last_name,
            profile_data.display_name,
            profile_data.username,
        )
        record["display_name"] = identity.display_name
        record["username"] = identity.username
        return record

    def _insert(self, record: Dict[str, Any], client: Client) -> ProfileResponse:
        try:
            result = client.table("profiles").insert(record).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create profile")
            return ProfileResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Profile creation error: {e}")
            raise to_http_exception(e, "Profile")

    def _update(self, table, update_data: Dict[str, Any], key: str, value) -> ProfileResponse:
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = table.update(update_data).eq(key, value).execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")
            return ProfileResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Profile")
