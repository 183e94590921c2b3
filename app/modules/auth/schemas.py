from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from app.modules.profiles.schemas import ProfileResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class PhoneOtpRequest(BaseModel):
    phone: str = Field(..., min_length=1)


class PhoneVerifyRequest(BaseModel):
    phone: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: Optional[str] = None
    phone: Optional[str] = None


class OtpSentResponse(BaseModel):
    phone: str
    message: str


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: Optional[str] = None
    first_name: str
    last_name: str = ""
    username: Optional[str] = None
    display_name: Optional[str] = None
    address: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None


class SignupResponse(BaseModel):
    user_id: str
    email: str
    message: str
    profile: ProfileResponse
