from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from app.modules.profiles.schemas import DuprType
from app.modules.user_roles.schemas import UserRole


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str
    last_name: str = ""
    username: Optional[str] = None
    display_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    role: UserRole = "member"
    org_id: Optional[str] = None  # with location_id, where the role applies
    location_id: Optional[str] = None
    dupr_score_singles: Optional[float] = None
    dupr_score_doubles: Optional[float] = None
    dupr_type: Optional[DuprType] = None


class UserCreateResponse(BaseModel):
    success: bool = True
    user_id: str
    profile_id: int
    email: str
    role: str
    role_assigned: bool
