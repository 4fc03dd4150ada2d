"""Analytics schemas."""

from core.schemas.analytics.burndown_point import BurndownPoint
from core.schemas.analytics.member_productivity import MemberProductivity
from core.schemas.analytics.project_metrics import (
    PriorityBreakdown,
    ProjectMetrics,
    StatusBreakdown,
)
from core.schemas.analytics.project_timeline import ProjectTimeline, TimelineDataset
from core.schemas.analytics.time_range import (
    AnalyticsRangeQuery,
    TimelineQuery,
    TimeRange,
)
from core.schemas.analytics.velocity_point import VelocityPoint

__all__ = [
    "AnalyticsRangeQuery",
    "BurndownPoint",
    "MemberProductivity",
    "PriorityBreakdown",
    "ProjectMetrics",
    "ProjectTimeline",
    "StatusBreakdown",
    "TimeRange",
    "TimelineDataset",
    "TimelineQuery",
    "VelocityPoint",
]
