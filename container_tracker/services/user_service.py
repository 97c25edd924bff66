"""User service operations."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from container_tracker.core.errors import ConflictError, NotFoundError
from container_tracker.models import Container, ContainerHistory
from container_tracker.models.user import User, normalize_user_role
from container_tracker.services.unit_of_work import write_unit

logger = logging.getLogger(__name__)

EDITABLE_USER_FIELDS: tuple[str, ...] = ("email", "full_name", "role")


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email).limit(1))


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_or_404(db: Session, user_id: int) -> User:
    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(db: Session) -> list[User]:
    return list(db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc())).all())


def create_user(
    db: Session,
    username: str,
    email: str,
    hashed_password: str,
    full_name: str,
    role: str = "user",
) -> User:
    canonical_role = normalize_user_role(role)
    existing = db.scalar(
        select(User.id).where(or_(User.username == username, User.email == email)).limit(1)
    )
    if existing is not None:
        raise ConflictError("Username or email already exists")

    user = User(
        username=username,
        email=email,
        password_hash=hashed_password,
        full_name=full_name,
        role=canonical_role,
    )
    with write_unit(db, "create user", conflict_detail="Username or email already exists"):
        db.add(user)
    db.refresh(user)
    return user


def update_user(db: Session, user: User, changes: Mapping[str, Any]) -> bool:
    """Apply email/full name/role changes; return whether anything differed."""
    applied: dict[str, Any] = {}
    for key, value in changes.items():
        if key not in EDITABLE_USER_FIELDS or value is None:
            continue
        if key == "role":
            value = normalize_user_role(value)
        if getattr(user, key) != value:
            applied[key] = value

    if not applied:
        return False

    new_email = applied.get("email")
    if new_email is not None:
        conflict = db.scalar(select(User.id).where(User.email == new_email, User.id != user.id).limit(1))
        if conflict is not None:
            raise ConflictError("Email already exists")

    with write_unit(db, f"update user {user.id}", conflict_detail="Email already exists"):
        for key, value in applied.items():
            setattr(user, key, value)
    logger.info("[USERS] user_id=%s updated fields=%s", user.id, ",".join(applied))
    return True


def set_password_hash(db: Session, user: User, hashed_password: str) -> None:
    with write_unit(db, f"set password for user {user.id}"):
        user.password_hash = hashed_password


def user_has_container_activity(db: Session, user_id: int) -> bool:
    touched = db.scalar(
        select(func.count(Container.id)).where(
            or_(Container.created_by == user_id, Container.updated_by == user_id)
        )
    )
    authored = db.scalar(select(func.count(ContainerHistory.id)).where(ContainerHistory.changed_by == user_id))
    return bool(touched) or bool(authored)


def delete_user(db: Session, user_id: int) -> None:
    """Remove a user who never touched a container."""
    user = get_user_or_404(db, user_id)
    if user_has_container_activity(db, user_id):
        raise ConflictError("Cannot delete user who has created or updated containers")
    with write_unit(db, f"delete user {user_id}"):
        db.delete(user)
    logger.info("[USERS] user_id=%s deleted", user_id)
