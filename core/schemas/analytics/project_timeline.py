"""Project timeline chart schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class TimelineDataset(BaseSchemaModel):
    """One series of the timeline chart."""

    label: str
    data: list[int] = Field(default_factory=list)


class ProjectTimeline(BaseSchemaModel):
    """Velocity reshaped into parallel series keyed by day labels."""

    labels: list[str] = Field(default_factory=list)
    datasets: list[TimelineDataset] = Field(default_factory=list)
