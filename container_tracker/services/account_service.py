"""Account provisioning and credential helpers."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from container_tracker.core.config import settings
from container_tracker.core.errors import ValidationError
from container_tracker.core.security import get_password_hash, verify_password
from container_tracker.models import User
from container_tracker.services.user_service import create_user, get_user_by_username, set_password_hash

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_PASSWORD: str = "admin123"


def ensure_default_admin(db: Session) -> bool:
    """Ensure the configured admin account exists.

    Returns:
        bool: True when the admin user existed before this call.
    """
    existing_admin = get_user_by_username(db, settings.admin_user)
    if existing_admin is not None:
        if existing_admin.role != "admin":
            logger.warning(
                "[BOOTSTRAP] Configured admin username=%s has role=%s; leaving it unchanged.",
                existing_admin.username,
                existing_admin.role,
            )
        logger.info("[BOOTSTRAP] Admin exists")
        return True

    create_user(
        db=db,
        username=settings.admin_user,
        email=settings.admin_email,
        hashed_password=get_password_hash(settings.admin_pass),
        full_name="System Administrator",
        role="admin",
    )
    if settings.admin_pass == DEFAULT_ADMIN_PASSWORD:
        logger.warning(
            "[SECURITY] Default admin account created: %s/%s. Change default password immediately.",
            settings.admin_user,
            DEFAULT_ADMIN_PASSWORD,
        )
    else:
        logger.info("[BOOTSTRAP] Admin account %s created", settings.admin_user)
    return False


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    user = get_user_by_username(db, username.strip())
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise ValidationError([{"field": "current_password", "message": "Current password is incorrect"}])
    set_password_hash(db, user, get_password_hash(new_password))
    logger.info("[AUTH] user_id=%s changed password", user.id)
