"""Schema exports."""

from container_tracker.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    UpdateResult,
    VerifyResponse,
)
from container_tracker.schemas.container import (
    ContainerCreate,
    ContainerCreated,
    ContainerDetail,
    ContainerRead,
    ContainerTypeRead,
    ContainerUpdate,
    ContainerUpdated,
    HistoryEntryRead,
    MessageResponse,
)
from container_tracker.schemas.stats import StatsOverview
from container_tracker.schemas.user import (
    PasswordUpdate,
    UserActivity,
    UserCreate,
    UserCreated,
    UserRead,
    UserUpdate,
)

__all__ = [
    "ChangePasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "ProfileUpdate",
    "UpdateResult",
    "VerifyResponse",
    "ContainerCreate",
    "ContainerCreated",
    "ContainerDetail",
    "ContainerRead",
    "ContainerTypeRead",
    "ContainerUpdate",
    "ContainerUpdated",
    "HistoryEntryRead",
    "MessageResponse",
    "StatsOverview",
    "PasswordUpdate",
    "UserActivity",
    "UserCreate",
    "UserCreated",
    "UserRead",
    "UserUpdate",
]
