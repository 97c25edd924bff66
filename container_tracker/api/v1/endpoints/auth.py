"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from container_tracker.core.errors import AuthRequiredError
from container_tracker.core.security import create_user_token, get_current_user
from container_tracker.db.session import get_db
from container_tracker.models.user import User
from container_tracker.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    UpdateResult,
    VerifyResponse,
)
from container_tracker.schemas.container import MessageResponse
from container_tracker.schemas.user import UserRead
from container_tracker.services.account_service import authenticate_user, change_password
from container_tracker.services.user_service import update_user

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    user: User | None = authenticate_user(db, payload.username, payload.password)
    if user is None:
        logger.info("[AUTH] Failed login for username=%s", payload.username)
        raise AuthRequiredError("Invalid credentials")
    return LoginResponse(token=create_user_token(user), user=UserRead.model_validate(user))


@router.get("/verify", response_model=VerifyResponse)
def verify(current_user: User = Depends(get_current_user)) -> VerifyResponse:
    return VerifyResponse(user=UserRead.model_validate(current_user))


@router.post("/change-password", response_model=MessageResponse)
def change_own_password(
    payload: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    change_password(db, current_user, payload.current_password, payload.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/profile", response_model=UserRead)
def get_profile(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.put("/profile", response_model=UpdateResult)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UpdateResult:
    if not update_user(db, current_user, payload.model_dump(exclude_unset=True)):
        return UpdateResult(message="No changes detected", changed=False)
    return UpdateResult(message="Profile updated successfully", changed=True)
