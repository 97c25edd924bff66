"""User management endpoints (admin only)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from container_tracker.api.v1.endpoints.containers import serialize_container, serialize_history_entry
from container_tracker.core.errors import PermissionDeniedError
from container_tracker.core.security import get_current_user, get_password_hash, require_admin
from container_tracker.db.session import get_db
from container_tracker.models import User
from container_tracker.schemas.auth import UpdateResult
from container_tracker.schemas.container import MessageResponse
from container_tracker.schemas.user import (
    ActivityHistoryEntry,
    PasswordUpdate,
    UserActivity,
    UserCreate,
    UserCreated,
    UserRead,
    UserUpdate,
)
from container_tracker.services import user_service
from container_tracker.services.container_service import list_user_containers
from container_tracker.services.history_service import list_user_history

router: APIRouter = APIRouter()


@router.get("", response_model=list[UserRead], summary="List users")
def list_users(db: Session = Depends(get_db), _: User = Depends(require_admin)) -> list[User]:
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)) -> User:
    return user_service.get_user_or_404(db, user_id)


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> UserCreated:
    user = user_service.create_user(
        db=db,
        username=payload.username,
        email=payload.email,
        hashed_password=get_password_hash(payload.password),
        full_name=payload.full_name,
        role=payload.role,
    )
    return UserCreated(id=user.id)


@router.put("/{user_id}", response_model=UpdateResult)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> UpdateResult:
    user = user_service.get_user_or_404(db, user_id)
    if not user_service.update_user(db, user, payload.model_dump(exclude_unset=True)):
        return UpdateResult(message="No changes detected", changed=False)
    return UpdateResult(message="User updated successfully", changed=True)


@router.put("/{user_id}/password", response_model=MessageResponse)
def update_user_password(
    user_id: int,
    payload: PasswordUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageResponse:
    user = user_service.get_user_or_404(db, user_id)
    user_service.set_password_hash(db, user, get_password_hash(payload.new_password))
    return MessageResponse(message="Password updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> MessageResponse:
    user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/{user_id}/activity", response_model=UserActivity)
def get_user_activity(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserActivity:
    """Containers the user touched and the latest history entries they authored."""
    if current_user.role != "admin" and current_user.id != user_id:
        raise PermissionDeniedError()
    user_service.get_user_or_404(db, user_id)

    history: list[ActivityHistoryEntry] = []
    for entry in list_user_history(db, user_id):
        container = entry.container
        history.append(
            ActivityHistoryEntry(
                **serialize_history_entry(entry).model_dump(),
                container_number=container.container_number,
                container_type_name=container.container_type.name if container.container_type else None,
            )
        )
    return UserActivity(
        containers=[serialize_container(container) for container in list_user_containers(db, user_id)],
        history=history,
    )
