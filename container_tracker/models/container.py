"""Container, container type and change-history ORM models."""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from container_tracker.db.base import Base
from container_tracker.models.user import User

CONTAINER_STATUSES = ("planned", "in_transit", "arrived", "departed")
UPCOMING_STATUSES = ("planned", "in_transit")


class ContainerType(Base):
    """Static reference data describing what a container carries."""

    __tablename__ = "container_types"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    containers: Mapped[list["Container"]] = relationship(back_populates="container_type")


class Container(Base):
    """Tracked shipping container.

    ``version`` is the optimistic-lock counter: every UPDATE is issued with
    ``WHERE version = <value read>`` and bumps it, so a concurrent writer makes
    the flush fail instead of silently overwriting.
    """

    __tablename__ = "containers"

    id: Mapped[int] = mapped_column(primary_key=True)
    container_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    container_type_id: Mapped[int] = mapped_column(ForeignKey("container_types.id"), nullable=False)
    source: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(
        Enum(*CONTAINER_STATUSES, name="container_status"),
        nullable=False,
        default="planned",
        index=True,
    )
    planned_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expected_arrival_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    actual_arrival_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    departure_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    destination: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    updated_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    container_type: Mapped[ContainerType] = relationship(back_populates="containers")
    creator: Mapped[User] = relationship(foreign_keys=[created_by])
    updater: Mapped[User] = relationship(foreign_keys=[updated_by])
    history: Mapped[list["ContainerHistory"]] = relationship(
        back_populates="container",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}


class ContainerHistory(Base):
    """Append-only record of one tracked field changing in one update call."""

    __tablename__ = "container_history"

    id: Mapped[int] = mapped_column(primary_key=True)
    container_id: Mapped[int] = mapped_column(ForeignKey("containers.id", ondelete="CASCADE"), nullable=False, index=True)
    field_name: Mapped[str] = mapped_column(String(64), nullable=False)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    changed_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    container: Mapped[Container] = relationship(back_populates="history")
    author: Mapped[User] = relationship()
