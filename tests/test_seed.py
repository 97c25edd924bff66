"""Startup seed and bootstrap tests."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from container_tracker.core.config import settings
from container_tracker.core.security import verify_password
from container_tracker.db.seed import DEFAULT_CONTAINER_TYPES, ensure_container_types
from container_tracker.models import ContainerType, User
from container_tracker.services.account_service import ensure_default_admin


def test_container_types_seed_is_idempotent(db: Session) -> None:
    assert ensure_container_types(db) == len(DEFAULT_CONTAINER_TYPES)
    assert ensure_container_types(db) == 0

    names = db.scalars(select(ContainerType.name).order_by(ContainerType.id)).all()
    assert names == ["Mattress", "Sofa", "Dining", "Furniture"]


def test_default_admin_is_created_once(db: Session, monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_user", "chief")
    monkeypatch.setattr(settings, "admin_pass", "chief-pass")
    monkeypatch.setattr(settings, "admin_email", "chief@example.com")

    assert ensure_default_admin(db) is False
    assert ensure_default_admin(db) is True

    admins = db.scalars(select(User).where(User.username == "chief")).all()
    assert len(admins) == 1
    assert admins[0].role == "admin"
    assert admins[0].email == "chief@example.com"
    assert verify_password("chief-pass", admins[0].password_hash)
