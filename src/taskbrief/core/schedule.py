"""Pure prioritization and time-budget scheduling - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date

from .enrichment import EnrichedTask

DAILY_CAPACITY_MINUTES = 12 * 60


def urgency_rank(task: EnrichedTask, as_of: date) -> int:
    """0 = overdue, 1 = due today, 2 = anything else."""
    if task.task.is_overdue(as_of):
        return 0
    if task.task.is_due_today(as_of):
        return 1
    return 2


def sort_by_priority(tasks: list[EnrichedTask], as_of: date) -> list[EnrichedTask]:
    """
    Sort by priority score (descending), then urgency, then due date string.

    Stable, so equal keys keep their input order. A missing due date compares
    as the empty string. Pure function - no I/O.
    """

    def sort_key(t: EnrichedTask) -> tuple[int, int, str]:
        return (-(t.priority_score or 1), urgency_rank(t, as_of), t.due_date or "")

    return sorted(tasks, key=sort_key)


@dataclass
class Schedule:
    """Tasks split into today's focus and deferred work under a daily cap."""

    date: date
    todays_focus: list[EnrichedTask] = field(default_factory=list)
    deferred: list[EnrichedTask] = field(default_factory=list)
    overdue: list[EnrichedTask] = field(default_factory=list)
    capacity_minutes: int = DAILY_CAPACITY_MINUTES

    @property
    def focus_minutes(self) -> int:
        return sum(t.minutes for t in self.todays_focus)

    @property
    def deferred_minutes(self) -> int:
        return sum(t.minutes for t in self.deferred)

    @property
    def total_minutes(self) -> int:
        return self.focus_minutes + self.deferred_minutes


def schedule_tasks(
    tasks: list[EnrichedTask],
    as_of: date,
    capacity_minutes: int = DAILY_CAPACITY_MINUTES,
) -> Schedule:
    """
    Pack sorted tasks greedily into the daily capacity.

    Overdue tasks always go first into today's focus and count against the cap,
    even if they alone exceed it. Remaining tasks are admitted in priority order
    while they fit; the rest are deferred. Pure function - no I/O.
    """
    ordered = sort_by_priority(tasks, as_of)
    result = Schedule(date=as_of, capacity_minutes=capacity_minutes)

    available = []
    for task in ordered:
        if task.task.is_overdue(as_of):
            result.overdue.append(task)
        else:
            available.append(task)

    used = 0
    for task in result.overdue:
        result.todays_focus.append(task)
        used += task.minutes

    for task in available:
        if used + task.minutes <= capacity_minutes:
            result.todays_focus.append(task)
            used += task.minutes
        else:
            result.deferred.append(task)

    return result
