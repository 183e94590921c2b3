from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.user_roles.schemas import UserRoleCreate, UserRoleUpdate, UserRoleResponse
from app.modules.user_roles.service import UserRoleService
from app.core.dependencies import require_permission
from app.core.session import AuthSession
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/user-roles", tags=["user-roles"])


def get_user_role_service(supabase: Client = Depends(get_supabase)) -> UserRoleService:
    return UserRoleService(supabase)


@router.get("", response_model=List[UserRoleResponse])
async def list_user_roles(
    user_id: Optional[int] = None,
    org_id: Optional[str] = None,
    location_id: Optional[str] = None,
    session: AuthSession = Depends(require_permission("user_roles:read")),
    service: UserRoleService = Depends(get_user_role_service)
):
    return service.list_user_roles(user_id=user_id, org_id=org_id, location_id=location_id)


@router.get("/{user_role_id}", response_model=UserRoleResponse)
async def get_user_role(
    user_role_id: int,
    session: AuthSession = Depends(require_permission("user_roles:read")),
    service: UserRoleService = Depends(get_user_role_service)
):
    return service.get_user_role_by_id(user_role_id)


@router.post("", response_model=UserRoleResponse, status_code=201)
async def create_user_role(
    user_role_data: UserRoleCreate,
    session: AuthSession = Depends(require_permission("user_roles:create")),
    service: UserRoleService = Depends(get_user_role_service)
):
    return service.create_user_role(user_role_data)


@router.put("/{user_role_id}", response_model=UserRoleResponse)
async def update_user_role(
    user_role_id: int,
    user_role_data: UserRoleUpdate,
    session: AuthSession = Depends(require_permission("user_roles:update")),
    service: UserRoleService = Depends(get_user_role_service)
):
    return service.update_user_role(user_role_id, user_role_data)


@router.delete("/{user_role_id}")
async def delete_user_role(
    user_role_id: int,
    session: AuthSession = Depends(require_permission("user_roles:delete")),
    service: UserRoleService = Depends(get_user_role_service)
):
    service.delete_user_role(user_role_id)
    return {"message": "User role deleted successfully"}
