from pydantic import BaseModel
from typing import Any, Dict, Literal, Optional


class FormEvent(BaseModel):
    """One message from the client of an identity form session"""
    type: Literal["open", "name", "display_name", "username", "email", "submit"]
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    value: Optional[str] = None
    record: Optional[Dict[str, Any]] = None


class ResolvedIdentity(BaseModel):
    type: Literal["resolved"] = "resolved"
    first_name: str
    last_name: str
    email: str
    display_name: str
    username: str
