from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class OrgCreate(BaseModel):
    id: Optional[str] = None  # generated by the database when omitted
    name: str
    description: Optional[str] = None
    street: str
    suite: Optional[str] = None
    city: str
    state: str
    zip: str
    phone: Optional[str] = None
    web_url: Optional[str] = None


class OrgUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    web_url: Optional[str] = None


class OrgResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    web_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
