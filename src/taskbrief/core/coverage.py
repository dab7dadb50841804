"""Priority coverage and recommendations derived from a schedule."""

from dataclasses import dataclass

from .durations import format_duration
from .enrichment import EnrichedTask
from .schedule import Schedule


@dataclass(frozen=True)
class PriorityCoverage:
    """How much of today's focus addresses one configured priority."""

    priority: str
    covered: bool
    task_count: int
    time_minutes: int

    @property
    def name(self) -> str:
        """Label without its parenthesized detail."""
        return self.priority.split("(")[0].strip()

    def to_dict(self) -> dict:
        return {
            "priority": self.priority,
            "covered": self.covered,
            "taskCount": self.task_count,
            "timeMinutes": self.time_minutes,
        }


def matches_priority(task: EnrichedTask, priority: str) -> bool:
    """
    Exact priority area match, or a substring match for score 2+ tasks.

    A score 2+ task without a priority area matches every label.
    """
    area = task.enrichment.priority_area
    if area == priority:
        return True
    return task.priority_score >= 2 and (area or "").lower() in priority.lower()


def compute_coverage(focus: list[EnrichedTask], priorities: list[str]) -> list[PriorityCoverage]:
    """One coverage record per configured priority, in configured order."""
    coverage = []
    for priority in priorities:
        matched = [t for t in focus if matches_priority(t, priority)]
        coverage.append(
            PriorityCoverage(
                priority=priority,
                covered=len(matched) > 0,
                task_count=len(matched),
                time_minutes=sum(t.minutes for t in matched),
            )
        )
    return coverage


def build_recommendations(schedule: Schedule) -> list[str]:
    recommendations = []
    if schedule.overdue:
        recommendations.append("Start with overdue items")
    if any((t.priority_score or 1) >= 3 for t in schedule.todays_focus):
        recommendations.append("Focus on high-priority initiatives")
    if any(t.enrichment.complexity >= 4 for t in schedule.todays_focus):
        recommendations.append("Block 2-hour window for complex tasks")
    if schedule.deferred:
        cap_hours = schedule.capacity_minutes // 60
        recommendations.append(f"{len(schedule.deferred)} tasks deferred to maintain {cap_hours}h focus")
    return recommendations


def build_motivation(schedule: Schedule) -> str:
    focus_time = format_duration(schedule.focus_minutes)
    return (
        f"Focused day ahead! {len(schedule.todays_focus)} priority tasks in {focus_time}"
        " - strategic and achievable."
    )
