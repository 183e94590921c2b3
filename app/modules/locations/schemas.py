from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class LocationCreate(BaseModel):
    id: Optional[str] = None
    org_id: str
    name: str
    description: Optional[str] = None
    street: str
    suite: Optional[str] = None
    city: str
    state: str
    zip: str
    phone: Optional[str] = None
    web_url: Optional[str] = None


class LocationUpdate(BaseModel):
    org_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    web_url: Optional[str] = None


class LocationResponse(BaseModel):
    id: str
    org_id: str
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
