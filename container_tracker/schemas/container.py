"""Container API schemas."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ContainerStatus = Literal["planned", "in_transit", "arrived", "departed"]


class ContainerCreate(BaseModel):
    """Payload for registering a new container."""

    container_number: str = Field(min_length=1, max_length=64)
    container_type_id: int
    source: str = Field(min_length=1, max_length=128)
    status: ContainerStatus = "planned"
    planned_date: date | None = None
    expected_arrival_date: date | None = None
    actual_arrival_date: date | None = None
    departure_date: date | None = None
    destination: str | None = Field(default=None, max_length=255)
    notes: str | None = None

    @field_validator("container_number", "source")
    @classmethod
    def strip_required_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class ContainerUpdate(BaseModel):
    """Partial update; only keys present in the request body are considered.

    Unknown keys (including ``container_number``) are dropped.
    """

    container_type_id: int | None = None
    source: str | None = Field(default=None, max_length=128)
    status: ContainerStatus | None = None
    planned_date: date | None = None
    expected_arrival_date: date | None = None
    actual_arrival_date: date | None = None
    departure_date: date | None = None
    destination: str | None = Field(default=None, max_length=255)
    notes: str | None = None

    @field_validator("status")
    @classmethod
    def reject_null_status(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("status cannot be null")
        return value

    # Null or blank reference fields are judged by the service, which
    # drops them entirely while they are not updatable.
    @field_validator("source")
    @classmethod
    def strip_source(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    def to_patch(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class HistoryEntryRead(BaseModel):
    """One recorded field change."""

    id: int
    container_id: int
    field_name: str
    old_value: str | None
    new_value: str | None
    changed_by: int
    changed_by_name: str | None = None
    changed_at: datetime


class ContainerRead(BaseModel):
    """Container row joined with its type and author names."""

    id: int
    container_number: str
    container_type_id: int
    container_type_name: str | None = None
    source: str
    status: str
    planned_date: date | None
    expected_arrival_date: date | None
    actual_arrival_date: date | None
    departure_date: date | None
    destination: str | None
    notes: str | None
    created_by: int
    created_by_name: str | None = None
    updated_by: int
    updated_by_name: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContainerDetail(ContainerRead):
    history: list[HistoryEntryRead] = []


class ContainerCreated(BaseModel):
    message: str = "Container created successfully"
    id: int


class ContainerUpdated(BaseModel):
    message: str
    changed: bool


class ContainerTypeRead(BaseModel):
    id: int
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
