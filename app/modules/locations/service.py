from supabase import Client
from app.core.errors import to_http_exception
from app.modules.locations.schemas import LocationCreate, LocationUpdate, LocationResponse
from typing import List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException


class LocationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_locations(self, org_id: Optional[str] = None) -> List[LocationResponse]:
        """List locations ordered by name, optionally for one org"""
        try:
            query = self.supabase.table("locations").select("*")
            if org_id:
                query = query.eq("org_id", org_id)
            result = query.order("name").execute()
            return [LocationResponse(**location) for location in result.data]
        except Exception as e:
            raise to_http_exception(e, "Location")

    def get_location_by_id(self, location_id: str) -> LocationResponse:
        try:
            result = self.supabase.table("locations")\
                .select("*")\
                .eq("id", location_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Location not found")
            return LocationResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Location")

    def create_location(self, location_data: LocationCreate) -> LocationResponse:
        try:
            result = self.supabase.table("locations")\
                .insert(location_data.model_dump(exclude_none=True))\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create location")
            return LocationResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Location")

    def update_location(self, location_id: str, location_data: LocationUpdate) -> LocationResponse:
        update_data = location_data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("locations")\
                .update(update_data)\
                .eq("id", location_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Location not found")
            return LocationResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Location")

    def delete_location(self, location_id: str) -> bool:
        try:
            result = self.supabase.table("locations")\
                .delete()\
                .eq("id", location_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Location not found")
            return True
        except Exception as e:
            raise to_http_exception(e, "Location")
