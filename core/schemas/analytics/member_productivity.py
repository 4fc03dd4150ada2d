"""Team productivity schema."""

from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class MemberProductivity(BaseSchemaModel):
    """Productivity of one assignee in a project."""

    user_id: UUID
    user_name: str
    tasks_completed: int = Field(0, ge=0)
    tasks_in_progress: int = Field(0, ge=0)
    tasks_overdue: int = Field(0, ge=0)
    avg_completion_time: float = Field(0.0, description="Days")
    productivity: float = Field(0.0, ge=0, description="Score, floored at 0")
