"""Plain-text rendering of a daily plan for a chat message."""

from datetime import date

from .briefing import DailyPlan
from .durations import format_duration, format_short_duration
from .enrichment import EnrichedTask

MAX_MESSAGE_CHARS = 3900
TRUNCATION_MARKER = "\n…"
FOOTER_HINT = "Reply /summary for updated brief"


def format_header_date(d: date) -> str:
    """'Saturday, Oct 18' style date."""
    return f"{d.strftime('%A, %b')} {d.day}"


def format_task_line(task: EnrichedTask, as_of: date) -> str:
    """
    Format a single task for display.

    Pure function - no I/O.
    """
    duration = format_short_duration(task.minutes)

    tag = ""
    if task.enrichment.workstream:
        tag = f" – {task.enrichment.workstream}"
    elif task.enrichment.priority_area:
        tag = f" – {task.enrichment.priority_area.split('(')[0].strip()}"

    due = ""
    if task.due_date:
        # Compared with the plan's date rather than the current instant
        due = " - Overdue 🔴" if task.task.is_overdue(as_of) else f" - Due {task.due_date}"

    return f"• {task.title} ({duration}){tag}{due}"


def _section(title: str, tasks: list[EnrichedTask], as_of: date, max_tasks: int) -> list[str]:
    if not tasks:
        return []
    shown = tasks[:max_tasks] if max_tasks > 0 else tasks
    return [title, *(format_task_line(t, as_of) for t in shown), ""]


def truncate(text: str, max_chars: int = MAX_MESSAGE_CHARS) -> str:
    if len(text) > max_chars:
        return text[:max_chars] + TRUNCATION_MARKER
    return text


def render_plan(plan: DailyPlan, max_tasks: int = 0, max_chars: int = MAX_MESSAGE_CHARS) -> str:
    """
    Render the plan as a message.

    Empty sections are left out entirely. max_tasks caps lines per task section
    (0 = unlimited) without touching the plan itself.
    """
    cap = f"{plan.schedule.capacity_minutes // 60}h"

    lines = [f"🌅 Daily Task Summary - {format_header_date(plan.date)}", ""]
    lines += _section(f"📋 Today's Focus (≤{cap}):", plan.todays_focus, plan.date, max_tasks)
    lines += _section(f"🗂️ Deferred (beyond {cap}):", plan.deferred, plan.date, max_tasks)

    lines.append("📊 Summary:")
    lines.append(f"• Focus Hours: {plan.focus_time}")
    if plan.deferred:
        lines.append(f"• Deferred: {plan.deferred_time}")

    if plan.priority_coverage:
        lines.append("🎯 Priority Coverage:")
        for coverage in plan.priority_coverage:
            detail = ""
            if coverage.task_count > 0:
                plural = "s" if coverage.task_count > 1 else ""
                time_str = f" ({format_duration(coverage.time_minutes)})" if coverage.time_minutes > 0 else ""
                detail = f" – {coverage.task_count} task{plural}{time_str}"
            lines.append(f"• {coverage.name}{detail}")
    lines.append("")

    if plan.recommendations:
        lines.append("💡 Recommendations:")
        lines += [f"• {r}" for r in plan.recommendations]
        lines.append("")

    lines.append(f"🚀 {plan.motivation}")
    lines.append("")
    lines.append("---")
    lines.append(FOOTER_HINT)

    return truncate("\n".join(lines), max_chars)
