from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal
from datetime import datetime

DuprType = Literal["default", "api", "self", "instructor"]


class ProfileCreate(BaseModel):
    email: EmailStr
    first_name: str
    last_name: str = ""
    username: Optional[str] = None  # derived from the name when empty
    display_name: Optional[str] = None  # derived from the name when empty
    phone: Optional[str] = None
    address: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    dupr_score_singles: Optional[float] = None
    dupr_score_doubles: Optional[float] = None
    dupr_type: Optional[DuprType] = None
    password: Optional[str] = Field(None, min_length=6)  # also creates the auth user
    confirm_password: Optional[str] = None


class ProfileUpdate(BaseModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    dupr_score_singles: Optional[float] = None
    dupr_score_doubles: Optional[float] = None
    dupr_type: Optional[DuprType] = None


class ProfileSelfUpdate(BaseModel):
    """Fields a signed-in user may change on their own profile."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    dupr_score_singles: Optional[float] = None
    dupr_score_doubles: Optional[float] = None
    dupr_type: Optional[DuprType] = None


class ProfileResponse(BaseModel):
    id: int
    auth_id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None
    address: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    dupr_score_singles: Optional[float] = None
    dupr_score_doubles: Optional[float] = None
    dupr_type: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UsernameAvailability(BaseModel):
    available: bool
    username: str


class EmailAvailability(BaseModel):
    available: bool
    email: str
