"""Pure daily plan assembly - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from .coverage import PriorityCoverage, build_motivation, build_recommendations, compute_coverage
from .durations import format_duration
from .enrichment import EnrichedTask
from .schedule import DAILY_CAPACITY_MINUTES, Schedule, schedule_tasks


@dataclass
class DailyPlan:
    """Assembled daily plan ready for rendering."""

    date: date
    total_tasks: int
    schedule: Schedule
    priority_coverage: list[PriorityCoverage] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    motivation: str = ""

    @property
    def todays_focus(self) -> list[EnrichedTask]:
        return self.schedule.todays_focus

    @property
    def deferred(self) -> list[EnrichedTask]:
        return self.schedule.deferred

    @property
    def overdue(self) -> list[EnrichedTask]:
        return self.schedule.overdue

    @property
    def total_estimated_time(self) -> str:
        return format_duration(self.schedule.total_minutes)

    @property
    def focus_time(self) -> str:
        return format_duration(self.schedule.focus_minutes)

    @property
    def deferred_time(self) -> str:
        return format_duration(self.schedule.deferred_minutes)

    def to_dict(self) -> dict:
        """JSON-ready representation."""
        return {
            "date": self.date.isoformat(),
            "totalTasks": self.total_tasks,
            "totalEstimatedTime": self.total_estimated_time,
            "focusTime": self.focus_time,
            "deferredTime": self.deferred_time,
            "sections": {
                "todaysFocus": [t.to_dict() for t in self.todays_focus],
                "deferred": [t.to_dict() for t in self.deferred],
                "overdue": [t.to_dict() for t in self.overdue],
            },
            "priorityCoverage": [c.to_dict() for c in self.priority_coverage],
            "recommendations": list(self.recommendations),
            "motivation": self.motivation,
        }


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def assemble_plan(
    tasks: list[EnrichedTask],
    priorities: list[str],
    as_of: date | None = None,
    capacity_minutes: int = DAILY_CAPACITY_MINUTES,
) -> DailyPlan:
    """
    Assemble the daily plan from enriched tasks.

    Pure function - no I/O. Handles ordering, capacity packing, coverage and
    recommendations. The anchor date defaults to today's UTC date.
    """
    as_of = as_of or utc_today()
    schedule = schedule_tasks(tasks, as_of, capacity_minutes)
    return DailyPlan(
        date=as_of,
        total_tasks=len(tasks),
        schedule=schedule,
        priority_coverage=compute_coverage(schedule.todays_focus, priorities),
        recommendations=build_recommendations(schedule),
        motivation=build_motivation(schedule),
    )
