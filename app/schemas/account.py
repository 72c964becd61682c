"""
app/schemas/account.py

Purpose: Account request and response schemas

- Request bodies accept missing fields so the service can report
  which field is absent in its own error messages
- UserSummary is the only shape user records leave the service in
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    password: Optional[str] = None
    mobile_number: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Alice Doe",
                "email": "a@b.com",
                "address": "123 Main Street",
                "password": "Secret1!",
                "mobile_number": "9876543210"
            }
        }


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PhoneLookupRequest(BaseModel):
    mobile_number: Optional[str] = None


class LoginData(BaseModel):
    token: str
    email: str


class UserSummary(BaseModel):
    """
    Public projection of a user document. Never carries password
    material or session tokens.
    """
    id: str = Field(..., description="Store-assigned identifier")
    name: str
    email: str
    address: str
    mobile_number: str

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserSummary":
        return cls(
            id=str(document["_id"]),
            name=document.get("name", ""),
            email=document.get("email", ""),
            address=document.get("address", ""),
            mobile_number=document.get("mobile_number", ""),
        )
