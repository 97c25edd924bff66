"""Authentication-related request and response schemas."""

from pydantic import BaseModel, EmailStr, Field

from container_tracker.schemas.user import UserRead


class LoginRequest(BaseModel):
    """Payload for user login."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    """JWT response payload with the logged-in profile."""

    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: UserRead


class VerifyResponse(BaseModel):
    valid: bool = True
    user: UserRead


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class ProfileUpdate(BaseModel):
    email: EmailStr | None = None
    full_name: str | None = Field(default=None, min_length=1, max_length=255)


class UpdateResult(BaseModel):
    message: str
    changed: bool
