"""Per-field change detection and history recording for container updates."""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from container_tracker.core.errors import StorageError
from container_tracker.models import Container, ContainerHistory


@dataclass(frozen=True)
class ChangeRecord:
    field: str
    old: Any
    new: Any


def diff_container(
    current: Container,
    patch: Mapping[str, Any],
    whitelist: Collection[str],
) -> list[ChangeRecord]:
    """Return one change per whitelisted patch key whose value differs from the stored row.

    Keys absent from ``patch`` are never compared. Output follows the patch's
    iteration order.
    """
    changes: list[ChangeRecord] = []
    for field, new_value in patch.items():
        if field not in whitelist:
            continue
        old_value = getattr(current, field)
        if new_value != old_value:
            changes.append(ChangeRecord(field=field, old=old_value, new=new_value))
    return changes


def stringify_value(value: Any) -> str | None:
    """Render a column value for the history table; ``None`` stays ``None``."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def record_changes(
    db: Session,
    container_id: int,
    changes: Sequence[ChangeRecord],
    acting_user_id: int,
    *,
    changed_at: datetime | None = None,
) -> list[ContainerHistory]:
    """Stage one history row per change inside the caller's transaction."""
    timestamp = changed_at or datetime.now(timezone.utc)
    entries = [
        ContainerHistory(
            container_id=container_id,
            field_name=change.field,
            old_value=stringify_value(change.old),
            new_value=stringify_value(change.new),
            changed_by=acting_user_id,
            changed_at=timestamp,
        )
        for change in changes
    ]
    db.add_all(entries)
    try:
        db.flush()
    except SQLAlchemyError as exc:
        raise StorageError() from exc
    return entries


def list_container_history(db: Session, container_id: int) -> list[ContainerHistory]:
    """History for one container, newest first."""
    return list(
        db.scalars(
            select(ContainerHistory)
            .options(joinedload(ContainerHistory.author))
            .where(ContainerHistory.container_id == container_id)
            .order_by(ContainerHistory.changed_at.desc(), ContainerHistory.id.desc())
        ).all()
    )


def list_user_history(db: Session, user_id: int, *, limit: int = 50) -> list[ContainerHistory]:
    """Latest history entries authored by one user, with their containers loaded."""
    return list(
        db.scalars(
            select(ContainerHistory)
            .options(
                joinedload(ContainerHistory.author),
                joinedload(ContainerHistory.container).joinedload(Container.container_type),
            )
            .where(ContainerHistory.changed_by == user_id)
            .order_by(ContainerHistory.changed_at.desc(), ContainerHistory.id.desc())
            .limit(limit)
        ).all()
    )
