from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.orgs.schemas import OrgCreate, OrgUpdate, OrgResponse
from app.modules.orgs.service import OrgService
from app.core.dependencies import require_permission
from app.core.session import AuthSession
from supabase import Client
from typing import List

router = APIRouter(prefix="/orgs", tags=["orgs"])


def get_org_service(supabase: Client = Depends(get_supabase)) -> OrgService:
    return OrgService(supabase)


@router.get("", response_model=List[OrgResponse])
async def list_orgs(
    session: AuthSession = Depends(require_permission("orgs:read")),
    service: OrgService = Depends(get_org_service)
):
    return service.list_orgs()


@router.get("/{org_id}", response_model=OrgResponse)
async def get_org(
    org_id: str,
    session: AuthSession = Depends(require_permission("orgs:read")),
    service: OrgService = Depends(get_org_service)
):
    return service.get_org_by_id(org_id)


@router.post("", response_model=OrgResponse, status_code=201)
async def create_org(
    org_data: OrgCreate,
    session: AuthSession = Depends(require_permission("orgs:create")),
    service: OrgService = Depends(get_org_service)
):
    return service.create_org(org_data)


@router.put("/{org_id}", response_model=OrgResponse)
async def update_org(
    org_id: str,
    org_data: OrgUpdate,
    session: AuthSession = Depends(require_permission("orgs:update")),
    service: OrgService = Depends(get_org_service)
):
    return service.update_org(org_id, org_data)


@router.delete("/{org_id}")
async def delete_org(
    org_id: str,
    session: AuthSession = Depends(require_permission("orgs:delete")),
    service: OrgService = Depends(get_org_service)
):
    """Delete an org; fails with 409 while locations still reference it"""
    service.delete_org(org_id)
    return {"message": "Org deleted successfully"}
