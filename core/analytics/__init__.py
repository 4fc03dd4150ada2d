"""Pure analytics calculations over task snapshots."""

from core.analytics.calculations import (
    burndown_chart,
    days_in_range,
    project_metrics,
    project_timeline,
    productivity_score,
    task_velocity,
    team_productivity,
)
from core.analytics.snapshot import TaskSnapshot

__all__ = [
    "TaskSnapshot",
    "burndown_chart",
    "days_in_range",
    "productivity_score",
    "project_metrics",
    "project_timeline",
    "task_velocity",
    "team_productivity",
]
