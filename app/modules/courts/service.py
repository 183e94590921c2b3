from supabase import Client
from app.core.errors import to_http_exception
from app.modules.courts.schemas import CourtCreate, CourtUpdate, CourtResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class CourtService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_courts(self) -> List[CourtResponse]:
        try:
            result = self.supabase.table("courts")\
                .select("*")\
                .order("court_id")\
                .execute()
            return [CourtResponse(**court) for court in result.data]
        except Exception as e:
            logger.error(f"Error fetching courts: {e}")
            raise to_http_exception(e, "Court")

    def create_court(self, court_data: CourtCreate) -> CourtResponse:
        try:
            result = self.supabase.table("courts")\
                .insert(court_data.model_dump())\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create court")
            return CourtResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error creating court: {e}")
            raise to_http_exception(e, "Court")

    def update_court(self, court_id: int, court_data: CourtUpdate) -> CourtResponse:
        # Only description may be cleared with an explicit null
        update_data = {
            key: value for key, value in court_data.model_dump(exclude_unset=True).items()
            if value is not None or key == "description"
        }
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        try:
            result = self.supabase.table("courts")\
                .update(update_data)\
                .eq("court_id", court_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Court not found")
            return CourtResponse(**result.data[0])
        except Exception as e:
            raise to_http_exception(e, "Court")

    def delete_court(self, court_id: int) -> bool:
        try:
            result = self.supabase.table("courts")\
                .delete()\
                .eq("court_id", court_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Court not found")
            return True
        except Exception as e:
            logger.error(f"Error deleting court: {e}")
            raise to_http_exception(e, "Court")
