"""Functional core - pure business logic with no I/O."""

from .tasks import Task, normalize_items, normalize_lists, limit_tasks
from .context import Context, default_context, resolve_context
from .durations import parse_minutes, format_duration
from .enrichment import Enrichment, EnrichedTask, enrich_tasks, validate_category
from .schedule import Schedule, schedule_tasks, sort_by_priority
from .coverage import PriorityCoverage, compute_coverage, build_recommendations
from .briefing import DailyPlan, assemble_plan
from .report import render_plan, format_task_line

__all__ = [
    # Tasks
    "Task",
    "normalize_items",
    "normalize_lists",
    "limit_tasks",
    # Context
    "Context",
    "default_context",
    "resolve_context",
    # Enrichment
    "parse_minutes",
    "format_duration",
    "Enrichment",
    "EnrichedTask",
    "enrich_tasks",
    "validate_category",
    # Scheduling
    "Schedule",
    "schedule_tasks",
    "sort_by_priority",
    # Coverage
    "PriorityCoverage",
    "compute_coverage",
    "build_recommendations",
    # Briefing
    "DailyPlan",
    "assemble_plan",
    "render_plan",
    "format_task_line",
]
