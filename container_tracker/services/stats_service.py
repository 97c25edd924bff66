"""Read-only container rollups for the dashboard."""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from container_tracker.models import Container, ContainerType
from container_tracker.models.container import UPCOMING_STATUSES
from container_tracker.schemas.stats import SourceCount, StatsOverview, StatusCount, TypeCount


def get_overview(db: Session, today: date | None = None) -> StatsOverview:
    """Group-by counts per status, source and type plus the upcoming-arrival count."""
    today = today or date.today()

    status_rows = db.execute(
        select(Container.status, func.count(Container.id)).group_by(Container.status).order_by(Container.status)
    ).all()
    source_rows = db.execute(
        select(Container.source, func.count(Container.id)).group_by(Container.source).order_by(Container.source)
    ).all()
    type_rows = db.execute(
        select(ContainerType.name, func.count(Container.id))
        .select_from(Container)
        .join(ContainerType, Container.container_type_id == ContainerType.id)
        .group_by(ContainerType.id, ContainerType.name)
        .order_by(ContainerType.id)
    ).all()
    upcoming = db.scalar(
        select(func.count(Container.id)).where(
            Container.expected_arrival_date >= today,
            Container.status.in_(UPCOMING_STATUSES),
        )
    )

    return StatsOverview(
        status_breakdown=[StatusCount(status=status, count=count) for status, count in status_rows],
        source_breakdown=[SourceCount(source=source, count=count) for source, count in source_rows],
        type_breakdown=[TypeCount(type=name, count=count) for name, count in type_rows],
        upcoming_containers=int(upcoming or 0),
    )
