"""Project metrics schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class PriorityBreakdown(BaseSchemaModel):
    """Task counts per priority."""

    low: int = 0
    medium: int = 0
    high: int = 0
    critical: int = 0


class StatusBreakdown(BaseSchemaModel):
    """Task counts per workflow status (cancelled tasks are not listed)."""

    todo: int = 0
    in_progress: int = 0
    in_review: int = 0
    done: int = 0


class ProjectMetrics(BaseSchemaModel):
    """Point-in-time metrics of a project."""

    total_tasks: int = Field(0, ge=0)
    completed_tasks: int = Field(0, ge=0)
    in_progress_tasks: int = Field(0, ge=0)
    todo_tasks: int = Field(0, ge=0)
    overdue_tasks: int = Field(0, ge=0)
    completion_rate: float = Field(0.0, description="Percentage, not rounded")
    avg_task_duration: float = Field(
        0.0, description="Mean days from creation to completion of done tasks"
    )
    tasks_by_priority: PriorityBreakdown = Field(default_factory=PriorityBreakdown)
    tasks_by_status: StatusBreakdown = Field(default_factory=StatusBreakdown)
