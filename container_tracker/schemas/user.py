"""User management schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from container_tracker.schemas.container import ContainerRead, HistoryEntryRead

UserRole = Literal["admin", "manager", "user"]


class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=128)
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1, max_length=255)
    role: UserRole = "user"


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    role: UserRole | None = None


class PasswordUpdate(BaseModel):
    new_password: str = Field(min_length=6)


class UserRead(BaseModel):
    id: int
    username: str
    email: str
    full_name: str
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreated(BaseModel):
    message: str = "User created successfully"
    id: int


class ActivityHistoryEntry(HistoryEntryRead):
    container_number: str
    container_type_name: str | None = None


class UserActivity(BaseModel):
    containers: list[ContainerRead]
    history: list[ActivityHistoryEntry]
