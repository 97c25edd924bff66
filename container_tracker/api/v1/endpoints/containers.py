"""Container endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from container_tracker.core.security import get_current_user
from container_tracker.db.session import get_db
from container_tracker.models import Container, ContainerHistory, User
from container_tracker.schemas.container import (
    ContainerCreate,
    ContainerCreated,
    ContainerDetail,
    ContainerRead,
    ContainerUpdate,
    ContainerUpdated,
    HistoryEntryRead,
    MessageResponse,
)
from container_tracker.schemas.stats import StatsOverview
from container_tracker.services import container_service
from container_tracker.services.history_service import list_container_history
from container_tracker.services.stats_service import get_overview

router: APIRouter = APIRouter()


def _full_name(user: User | None) -> str | None:
    return user.full_name if user is not None else None


def serialize_container(container: Container) -> ContainerRead:
    return ContainerRead.model_validate(container).model_copy(
        update={
            "container_type_name": container.container_type.name if container.container_type else None,
            "created_by_name": _full_name(container.creator),
            "updated_by_name": _full_name(container.updater),
        }
    )


def serialize_history_entry(entry: ContainerHistory) -> HistoryEntryRead:
    return HistoryEntryRead(
        id=entry.id,
        container_id=entry.container_id,
        field_name=entry.field_name,
        old_value=entry.old_value,
        new_value=entry.new_value,
        changed_by=entry.changed_by,
        changed_by_name=_full_name(entry.author),
        changed_at=entry.changed_at,
    )


@router.get("", response_model=list[ContainerRead], summary="List containers")
def list_containers(
    status_value: str | None = Query(default=None, alias="status"),
    source: str | None = None,
    container_type: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
) -> list[ContainerRead]:
    """Return containers newest-created first, filtered by the given criteria."""
    containers = container_service.list_containers(
        db,
        status=status_value,
        source=source,
        container_type_id=container_type,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
    )
    return [serialize_container(container) for container in containers]


@router.get("/stats/overview", response_model=StatsOverview, summary="Container statistics")
def stats_overview(db: Session = Depends(get_db)) -> StatsOverview:
    return get_overview(db)


@router.get("/{container_id}", response_model=ContainerDetail)
def get_container(container_id: int, db: Session = Depends(get_db)) -> ContainerDetail:
    container = container_service.get_container(db, container_id)
    history = [serialize_history_entry(entry) for entry in list_container_history(db, container_id)]
    return ContainerDetail(**serialize_container(container).model_dump(), history=history)


@router.post("", response_model=ContainerCreated, status_code=status.HTTP_201_CREATED)
def create_container(
    payload: ContainerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ContainerCreated:
    container = container_service.create_container(db, payload, current_user)
    return ContainerCreated(id=container.id)


@router.put("/{container_id}", response_model=ContainerUpdated)
def update_container(
    container_id: int,
    payload: ContainerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ContainerUpdated:
    outcome = container_service.update_container(db, container_id, payload.to_patch(), current_user)
    if not outcome.changed:
        return ContainerUpdated(message="No changes detected", changed=False)
    return ContainerUpdated(message="Container updated successfully", changed=True)


@router.delete("/{container_id}", response_model=MessageResponse)
def delete_container(
    container_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    container_service.delete_container(db, container_id, current_user)
    return MessageResponse(message="Container deleted successfully")
