from supabase import Client
from app.core.errors import to_http_exception
from app.modules.orgs.schemas import OrgCreate, OrgUpdate, OrgResponse
from typing import List
from datetime import datetime, timezone
from fastapi import HTTPException


class OrgService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_orgs(self) -> List[OrgResponse]:
        """List all orgs ordered by name"""
        try:
            result = self.supabase.table("orgs")\
                .select("*")\
                .order("name")\
                .execute()
            return [OrgResponse(**org) for org in result.data]
        except Exception as e:
            raise to_http_exception(e, "Org")

    def get_org_by_id(self, org_id: str) -> OrgResponse:
        try:
            result = self.supabase.table("orgs")\
                .select("*")\
                .eq("id", org_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Org not found")
            return OrgResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Org")

    def create_org(self, org_data: OrgCreate) -> OrgResponse:
        try:
            result = self.supabase.table("orgs")\
                .insert(org_data.model_dump(exclude_none=True))\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create org")
            return OrgResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Org")

    def update_org(self, org_id: str, org_data: OrgUpdate) -> OrgResponse:
        update_data = org_data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("orgs")\
                .update(update_data)\
                .eq("id", org_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Org not found")
            return OrgResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Org")

    def delete_org(self, org_id: str) -> bool:
        try:
            result = self.supabase.table("orgs")\
                .delete()\
                .eq("id", org_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Org not found")
            return True
        except Exception as e:
            raise to_http_exception(e, "Org")
