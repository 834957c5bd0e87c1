"""Authentication schemas for the Kanban API."""
from typing import Optional
from pydantic import BaseModel


class RegisterRequest(BaseModel):
    """Register request body. Presence is checked by the auth service."""
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Login request body."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Public identity of a user (the password hash is never exposed)."""
    id: int
    email: str

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Response containing the bearer token after login."""
    token: str
    user: UserResponse
