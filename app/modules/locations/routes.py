from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.locations.schemas import LocationCreate, LocationUpdate, LocationResponse
from app.modules.locations.service import LocationService
from app.core.dependencies import require_permission
from app.core.session import AuthSession
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/locations", tags=["locations"])


def get_location_service(supabase: Client = Depends(get_supabase)) -> LocationService:
    return LocationService(supabase)


@router.get("", response_model=List[LocationResponse])
async def list_locations(
    org_id: Optional[str] = None,
    session: AuthSession = Depends(require_permission("locations:read")),
    service: LocationService = Depends(get_location_service)
):
    return service.list_locations(org_id=org_id)


@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(
    location_id: str,
    session: AuthSession = Depends(require_permission("locations:read")),
    service: LocationService = Depends(get_location_service)
):
    return service.get_location_by_id(location_id)


@router.post("", response_model=LocationResponse, status_code=201)
async def create_location(
    location_data: LocationCreate,
    session: AuthSession = Depends(require_permission("locations:create")),
    service: LocationService = Depends(get_location_service)
):
    return service.create_location(location_data)


@router.put("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: str,
    location_data: LocationUpdate,
    session: AuthSession = Depends(require_permission("locations:update")),
    service: LocationService = Depends(get_location_service)
):
    return service.update_location(location_id, location_data)


@router.delete("/{location_id}")
async def delete_location(
    location_id: str,
    session: AuthSession = Depends(require_permission("locations:delete")),
    service: LocationService = Depends(get_location_service)
):
    service.delete_location(location_id)
    return {"message": "Location deleted successfully"}
