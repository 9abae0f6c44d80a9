from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from .constants import BusinessRules
from .models import ConnectionStatus, Role

# --- Authentication Schemas ---
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=BusinessRules.MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(..., min_length=BusinessRules.MIN_PASSWORD_LENGTH)
    role: Role

class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class AuthResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    token: str

# --- Profile Schemas ---
class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile. Email and password are not accepted here."""
    name: Optional[str] = None
    role: Optional[str] = None
    bio: Optional[str] = None
    # items are coerced and cleaned by ProfileService
    skills: Optional[Any] = None
    interests: Optional[Any] = None

class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    bio: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }

class DiscoveryFilters(BaseModel):
    """Typed discovery query; blank values are treated as absent."""
    role: Optional[str] = None
    skill: Optional[str] = None
    interest: Optional[str] = None
    search: Optional[str] = None

    @field_validator("role", "skill", "interest", "search", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

# --- Connection Schemas ---
class ConnectionCreate(BaseModel):
    recipient_id: int = Field(..., alias="recipientId", description="The ID of the user to connect with.")

    model_config = {
        "populate_by_name": True,
    }

class ConnectionStatusUpdate(BaseModel):
    status: str = Field(..., description='Either "accepted" or "declined".')

class ConnectionResponse(BaseModel):
    id: int
    requester_id: int
    recipient_id: int
    requester: Optional[UserResponse] = None
    recipient: Optional[UserResponse] = None
    status: ConnectionStatus
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }

class ConnectionActionResponse(BaseModel):
    message: str
    connection: ConnectionResponse

class MessageResponse(BaseModel):
    message: str
