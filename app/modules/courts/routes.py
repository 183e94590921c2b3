from fastapi import APIRouter, Depends
from app.modules.courts.schemas import CourtCreate, CourtUpdate, CourtResponse
from app.modules.courts.service import CourtService
from app.core.dependencies import get_admin_supabase, require_admin, require_permission
from app.core.session import AuthSession
from app.database.supabase_client import get_supabase
from supabase import Client
from typing import List

router = APIRouter(prefix="/courts", tags=["courts"])


def get_court_service(supabase: Client = Depends(get_supabase)) -> CourtService:
    return CourtService(supabase)


def get_admin_court_service(admin: Client = Depends(get_admin_supabase)) -> CourtService:
    return CourtService(admin)


@router.get("", response_model=List[CourtResponse])
async def list_courts(
    session: AuthSession = Depends(require_permission("courts:read")),
    service: CourtService = Depends(get_court_service)
):
    return service.list_courts()


@router.post("", response_model=CourtResponse, status_code=201)
async def create_court(
    court_data: CourtCreate,
    session: AuthSession = Depends(require_admin),
    service: CourtService = Depends(get_admin_court_service)
):
    return service.create_court(court_data)


@router.put("/{court_id}", response_model=CourtResponse)
async def update_court(
    court_id: int,
    court_data: CourtUpdate,
    session: AuthSession = Depends(require_admin),
    service: CourtService = Depends(get_admin_court_service)
):
    return service.update_court(court_id, court_data)


@router.delete("/{court_id}")
async def delete_court(
    court_id: int,
    session: AuthSession = Depends(require_admin),
    service: CourtService = Depends(get_admin_court_service)
):
    service.delete_court(court_id)
    return {"success": True, "message": "Court deleted successfully"}
