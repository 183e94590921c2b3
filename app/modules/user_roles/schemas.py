from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

UserRole = Literal["member", "staff", "admin"]


class UserRoleCreate(BaseModel):
    user_id: int
    org_id: str
    location_id: str
    role: UserRole = "member"


class UserRoleUpdate(BaseModel):
    user_id: Optional[int] = None
    org_id: Optional[str] = None
    location_id: Optional[str] = None
    role: Optional[UserRole] = None


class UserRoleResponse(BaseModel):
    id: int
    user_id: int
    org_id: str
    location_id: str
    role: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
