"""Container creation, partial update, deletion and read queries."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import Session, joinedload

from container_tracker.core.errors import NotFoundError
from container_tracker.models import Container, User
from container_tracker.schemas.container import ContainerCreate
from container_tracker.services.container_fields import (
    FieldDescriptor,
    build_field_table,
    ensure_container_type_exists,
    trackable_fields,
    updatable_fields,
)
from container_tracker.services.history_service import ChangeRecord, diff_container, record_changes
from container_tracker.services.unit_of_work import write_unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateOutcome:
    changed: bool
    changes: list[ChangeRecord] = field(default_factory=list)


def _with_relations(query: Select) -> Select:
    return query.options(
        joinedload(Container.container_type),
        joinedload(Container.creator),
        joinedload(Container.updater),
    )


def get_container(db: Session, container_id: int) -> Container:
    container = db.scalar(_with_relations(select(Container)).where(Container.id == container_id))
    if container is None:
        raise NotFoundError("Container not found")
    return container


def _lock_container(db: Session, container_id: int) -> Container:
    """Load the current row for writing, bypassing any stale identity-map copy."""
    container = db.scalar(
        select(Container)
        .where(Container.id == container_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    if container is None:
        raise NotFoundError("Container not found")
    return container


def list_containers(
    db: Session,
    *,
    status: str | None = None,
    source: str | None = None,
    container_type_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    limit: int | None = None,
) -> list[Container]:
    """Filter containers by exact status/source/type and an inclusive expected-arrival range."""
    query = _with_relations(select(Container))
    if status:
        query = query.where(Container.status == status)
    if source:
        query = query.where(Container.source == source)
    if container_type_id is not None:
        query = query.where(Container.container_type_id == container_type_id)
    if date_from is not None:
        query = query.where(Container.expected_arrival_date >= date_from)
    if date_to is not None:
        query = query.where(Container.expected_arrival_date <= date_to)
    query = query.order_by(Container.created_at.desc(), Container.id.desc())
    if limit is not None:
        query = query.limit(limit)
    return list(db.scalars(query).all())


def list_user_containers(db: Session, user_id: int) -> list[Container]:
    """Containers a user created or last updated, most recently updated first."""
    return list(
        db.scalars(
            _with_relations(select(Container))
            .where(or_(Container.created_by == user_id, Container.updated_by == user_id))
            .order_by(Container.updated_at.desc(), Container.id.desc())
        ).all()
    )


def create_container(db: Session, payload: ContainerCreate, acting_user: User) -> Container:
    """Insert a new container attributed to ``acting_user``.

    Uniqueness of ``container_number`` is enforced by the table's unique
    constraint; a duplicate surfaces as ``ConflictError``.
    """
    ensure_container_type_exists(db, payload.container_type_id)
    container = Container(
        **payload.model_dump(),
        created_by=acting_user.id,
        updated_by=acting_user.id,
    )
    with write_unit(db, "create container", conflict_detail="Container number already exists"):
        db.add(container)
    db.refresh(container)
    logger.info(
        "[CONTAINERS] container_id=%s number=%s created by user_id=%s",
        container.id,
        container.container_number,
        acting_user.id,
    )
    return container


def update_container(
    db: Session,
    container_id: int,
    patch: Mapping[str, Any],
    acting_user: User,
    *,
    field_table: dict[str, FieldDescriptor] | None = None,
) -> UpdateOutcome:
    """Apply a partial update and its history rows as one transaction.

    An empty diff returns ``changed=False`` without writing anything.
    """
    table = field_table or build_field_table()
    tracked = set(trackable_fields(table))

    with write_unit(db, f"update container {container_id}"):
        container = _lock_container(db, container_id)
        changes = diff_container(container, patch, updatable_fields(table))
        if not changes:
            return UpdateOutcome(changed=False)

        for change in changes:
            validator = table[change.field].validator
            if validator is not None:
                validator(db, change.new)

        now = datetime.now(timezone.utc)
        record_changes(
            db,
            container.id,
            [change for change in changes if change.field in tracked],
            acting_user.id,
            changed_at=now,
        )
        for change in changes:
            setattr(container, change.field, change.new)
        container.updated_by = acting_user.id
        container.updated_at = now

    logger.info(
        "[CONTAINERS] container_id=%s updated by user_id=%s fields=%s",
        container_id,
        acting_user.id,
        ",".join(change.field for change in changes),
    )
    return UpdateOutcome(changed=True, changes=changes)


def delete_container(db: Session, container_id: int, acting_user: User | None = None) -> None:
    """Hard-delete a container; its history goes with it in the same transaction."""
    with write_unit(db, f"delete container {container_id}"):
        container = _lock_container(db, container_id)
        db.delete(container)
    logger.info(
        "[CONTAINERS] container_id=%s deleted by user_id=%s",
        container_id,
        acting_user.id if acting_user is not None else None,
    )
