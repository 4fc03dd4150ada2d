"""Derived project analytics.

Every function here is a pure function of a list of TaskSnapshot values and,
where relevant, ``now`` and a TimeRange. Nothing is cached; callers recompute
on every request.

Days are calendar days in the current Django time zone. Durations are
reported in days (``timedelta.total_seconds() / 86400``). Percentages are
plain floats and are never rounded here.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta
from uuid import UUID

from django.utils import timezone

from core.analytics.snapshot import TaskSnapshot
from core.constants import OVERDUE_PENALTY_POINTS
from core.enums import TaskPriority, TaskStatus
from core.schemas.analytics import (
    BurndownPoint,
    MemberProductivity,
    PriorityBreakdown,
    ProjectMetrics,
    ProjectTimeline,
    StatusBreakdown,
    TimelineDataset,
    TimeRange,
    VelocityPoint,
)

SECONDS_PER_DAY = 86_400


def days_in_range(time_range: TimeRange) -> list[date]:
    """Every calendar day from the start day to the end day, both included."""
    first = timezone.localtime(time_range.start).date()
    last = timezone.localtime(time_range.end).date()
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """First and last instant of a calendar day in the current time zone."""
    return (
        timezone.make_aware(datetime.combine(day, time.min)),
        timezone.make_aware(datetime.combine(day, time.max)),
    )


def mean_duration_days(
    tasks: Iterable[TaskSnapshot], count_missing: bool = False
) -> float:
    """Mean days from creation to completion over DONE tasks.

    Only tasks with completed_at contribute a duration. With ``count_missing``
    the DONE tasks lacking it still count in the denominator.
    """
    done = [task for task in tasks if task.is_done]
    durations = [
        (task.completed_at - task.created_at).total_seconds() / SECONDS_PER_DAY
        for task in done
        if task.completed_at is not None
    ]
    denominator = len(done) if count_missing else len(durations)
    if not denominator:
        return 0.0
    return sum(durations) / denominator


def project_metrics(tasks: Sequence[TaskSnapshot], now: datetime) -> ProjectMetrics:
    """Counts, completion rate and average duration of a project's tasks.

    A project without tasks yields all zeros.
    """
    by_status: dict[str, int] = defaultdict(int)
    by_priority: dict[str, int] = defaultdict(int)
    for task in tasks:
        by_status[task.status] += 1
        by_priority[task.priority] += 1

    total = len(tasks)
    completed = by_status[TaskStatus.DONE.value]

    return ProjectMetrics(
        total_tasks=total,
        completed_tasks=completed,
        in_progress_tasks=by_status[TaskStatus.IN_PROGRESS.value],
        todo_tasks=by_status[TaskStatus.TODO.value],
        overdue_tasks=sum(1 for task in tasks if task.is_overdue(now)),
        completion_rate=(completed / total * 100) if total else 0.0,
        avg_task_duration=mean_duration_days(tasks),
        tasks_by_priority=PriorityBreakdown(
            low=by_priority[TaskPriority.LOW.value],
            medium=by_priority[TaskPriority.MEDIUM.value],
            high=by_priority[TaskPriority.HIGH.value],
            critical=by_priority[TaskPriority.CRITICAL.value],
        ),
        tasks_by_status=StatusBreakdown(
            todo=by_status[TaskStatus.TODO.value],
            in_progress=by_status[TaskStatus.IN_PROGRESS.value],
            in_review=by_status[TaskStatus.IN_REVIEW.value],
            done=completed,
        ),
    )


def task_velocity(
    tasks: Sequence[TaskSnapshot], time_range: TimeRange
) -> list[VelocityPoint]:
    """Tasks created, completed and in progress on each day of the range.

    ``tasks`` should be the tasks created or completed inside the range.
    ``in_progress`` uses the current status of each task, not the status
    it had on that day.
    """
    points = []
    for day in days_in_range(time_range):
        day_start, day_end = day_bounds(day)
        points.append(
            VelocityPoint(
                date=day,
                created=sum(
                    1 for task in tasks if day_start <= task.created_at <= day_end
                ),
                completed=sum(
                    1
                    for task in tasks
                    if task.completed_at is not None
                    and day_start <= task.completed_at <= day_end
                ),
                in_progress=sum(
                    1
                    for task in tasks
                    if task.created_at <= day_end
                    and task.status == TaskStatus.IN_PROGRESS.value
                ),
            )
        )
    return points


def burndown_chart(
    tasks: Sequence[TaskSnapshot], time_range: TimeRange
) -> list[BurndownPoint]:
    """Ideal and remaining work for each day of the range.

    The scope is the tasks created at or before the range start; the ideal
    line burns it down linearly to zero on the last day. ``remaining`` (and
    ``actual``, which carries the same value) is tasks created minus tasks
    completed by the end of each day.
    """
    days = days_in_range(time_range)
    total_tasks = sum(1 for task in tasks if task.created_at <= time_range.start)
    ideal_burn_rate = total_tasks / len(days)

    points = []
    for index, day in enumerate(days):
        _, day_end = day_bounds(day)
        created_by_day = sum(1 for task in tasks if task.created_at <= day_end)
        completed_by_day = sum(
            1
            for task in tasks
            if task.completed_at is not None and task.completed_at <= day_end
        )
        remaining = created_by_day - completed_by_day
        points.append(
            BurndownPoint(
                date=day,
                ideal=max(0.0, total_tasks - ideal_burn_rate * (index + 1)),
                actual=remaining,
                remaining=remaining,
            )
        )
    return points


def productivity_score(completed: int, assigned: int, overdue: int) -> float:
    """``completed / assigned * 100 - 5 * overdue``, floored at 0."""
    if assigned == 0:
        return 0.0
    return max(0.0, completed / assigned * 100 - OVERDUE_PENALTY_POINTS * overdue)


def team_productivity(
    tasks: Sequence[TaskSnapshot], now: datetime
) -> list[MemberProductivity]:
    """Per-assignee productivity, best score first. Unassigned tasks are ignored."""
    by_assignee: dict[UUID, list[TaskSnapshot]] = defaultdict(list)
    for task in tasks:
        if task.assignee_id is not None:
            by_assignee[task.assignee_id].append(task)

    results = []
    for assignee_id, assigned in by_assignee.items():
        completed = sum(1 for task in assigned if task.is_done)
        overdue = sum(1 for task in assigned if task.is_overdue(now))
        results.append(
            MemberProductivity(
                user_id=assignee_id,
                user_name=assigned[0].assignee_name or str(assignee_id),
                tasks_completed=completed,
                tasks_in_progress=sum(
                    1
                    for task in assigned
                    if task.status == TaskStatus.IN_PROGRESS.value
                ),
                tasks_overdue=overdue,
                avg_completion_time=mean_duration_days(
                    assigned, count_missing=True
                ),
                productivity=productivity_score(completed, len(assigned), overdue),
            )
        )

    results.sort(key=lambda member: member.productivity, reverse=True)
    return results


def project_timeline(velocity: Sequence[VelocityPoint]) -> ProjectTimeline:
    """Reshape velocity points into Created, Completed and In Progress series."""
    return ProjectTimeline(
        labels=[point.date.isoformat() for point in velocity],
        datasets=[
            TimelineDataset(label="Created", data=[p.created for p in velocity]),
            TimelineDataset(label="Completed", data=[p.completed for p in velocity]),
            TimelineDataset(
                label="In Progress", data=[p.in_progress for p in velocity]
            ),
        ],
    )
