"""Field descriptor table for container partial updates.

Both the change differ and the update applier read from this table, so the
set of fields that can be written through an update and the set of fields
recorded in history cannot drift apart silently.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from container_tracker.core.config import settings
from container_tracker.core.errors import ValidationError
from container_tracker.models.container import ContainerType

FieldValidator = Callable[[Session, Any], None]


def ensure_container_type_exists(db: Session, container_type_id: Any) -> None:
    """Reject references to unknown container types before touching the row."""
    if container_type_id is None:
        raise ValidationError([{"field": "container_type_id", "message": "container_type_id cannot be null"}])
    if db.get(ContainerType, container_type_id) is None:
        raise ValidationError(
            [{"field": "container_type_id", "message": f"Unknown container type {container_type_id}"}]
        )


def ensure_source_present(db: Session, source: Any) -> None:
    if source is None or not str(source).strip():
        raise ValidationError([{"field": "source", "message": "source must not be blank"}])


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    trackable: bool
    updatable: bool
    validator: FieldValidator | None = None


# status, dates, destination and notes are always editable and recorded.
# source and container_type_id are the reference fields; container_number is immutable.
_EDITABLE_FIELDS: tuple[str, ...] = (
    "status",
    "planned_date",
    "expected_arrival_date",
    "actual_arrival_date",
    "departure_date",
    "destination",
    "notes",
)


def build_field_table(reference_fields_editable: bool | None = None) -> dict[str, FieldDescriptor]:
    """Return descriptors keyed by field name, in declaration order."""
    if reference_fields_editable is None:
        reference_fields_editable = settings.reference_fields_editable

    table: dict[str, FieldDescriptor] = {
        "container_number": FieldDescriptor("container_number", trackable=False, updatable=False),
        "container_type_id": FieldDescriptor(
            "container_type_id",
            trackable=reference_fields_editable,
            updatable=reference_fields_editable,
            validator=ensure_container_type_exists,
        ),
        "source": FieldDescriptor(
            "source",
            trackable=reference_fields_editable,
            updatable=reference_fields_editable,
            validator=ensure_source_present,
        ),
    }
    for name in _EDITABLE_FIELDS:
        table[name] = FieldDescriptor(name, trackable=True, updatable=True)
    return table


def updatable_fields(table: dict[str, FieldDescriptor]) -> tuple[str, ...]:
    return tuple(name for name, descriptor in table.items() if descriptor.updatable)


def trackable_fields(table: dict[str, FieldDescriptor]) -> tuple[str, ...]:
    return tuple(name for name, descriptor in table.items() if descriptor.trackable)
