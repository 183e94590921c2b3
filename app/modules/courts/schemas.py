from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

CourtType = Literal["indoor", "outdoor", "covered"]


class CourtCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: CourtType = "indoor"


class CourtUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[CourtType] = None


class CourtResponse(BaseModel):
    court_id: int
    name: str
    description: Optional[str] = None
    type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
