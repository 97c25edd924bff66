"""Database seeding helpers."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from container_tracker.models import ContainerType
from container_tracker.services.unit_of_work import write_unit

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER_TYPES: tuple[tuple[str, str], ...] = (
    ("Mattress", "Mattress containers"),
    ("Sofa", "Sofa and upholstery containers"),
    ("Dining", "Dining furniture containers"),
    ("Furniture", "General furniture containers"),
)


def ensure_container_types(session: Session) -> int:
    """Insert any missing default container types; return how many were added."""
    existing: set[str] = set(session.scalars(select(ContainerType.name)).all())
    missing = [(name, description) for name, description in DEFAULT_CONTAINER_TYPES if name not in existing]
    if not missing:
        return 0

    with write_unit(session, "seed container types"):
        session.add_all(ContainerType(name=name, description=description) for name, description in missing)
    logger.info("[BOOTSTRAP] Seeded %s container types", len(missing))
    return len(missing)
