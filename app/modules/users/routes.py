from fastapi import APIRouter, Depends
from app.modules.users.schemas import UserCreate, UserCreateResponse
from app.modules.users.service import UserService
from app.core.dependencies import get_admin_supabase, require_permission
from app.core.session import AuthSession
from supabase import Client

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(admin: Client = Depends(get_admin_supabase)) -> UserService:
    return UserService(admin)


@router.post("", response_model=UserCreateResponse, status_code=201)
async def create_user(
    user_data: UserCreate,
    session: AuthSession = Depends(require_permission("users:create")),
    service: UserService = Depends(get_user_service)
):
    """Staff or admin creates a ready-to-use account (staff may only create members)"""
    return service.create_user(session, user_data)
