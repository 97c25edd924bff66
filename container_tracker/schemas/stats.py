"""Statistics overview schemas."""

from pydantic import BaseModel, ConfigDict, Field


class StatusCount(BaseModel):
    status: str
    count: int


class SourceCount(BaseModel):
    source: str
    count: int


class TypeCount(BaseModel):
    type: str
    count: int


class StatsOverview(BaseModel):
    """Dashboard rollups, serialized with the camelCase keys the client reads."""

    status_breakdown: list[StatusCount] = Field(serialization_alias="statusBreakdown")
    source_breakdown: list[SourceCount] = Field(serialization_alias="sourceBreakdown")
    type_breakdown: list[TypeCount] = Field(serialization_alias="typeBreakdown")
    upcoming_containers: int = Field(serialization_alias="upcomingContainers")

    model_config = ConfigDict(populate_by_name=True)
