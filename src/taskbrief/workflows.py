"""Shared workflow layer between CLI and Telegram.

generate_summary runs the whole pipeline: context, task collection,
enrichment, scheduling and rendering.
"""

import logging
from dataclasses import dataclass
from datetime import date

from .adapters.google_tasks import GoogleTasksAdapter
from .adapters.openai_classifier import OpenAIClassifier
from .config import Config
from .context import get_feedback_store, load_context
from .core.briefing import DailyPlan, assemble_plan
from .core.enrichment import enrich_tasks
from .core.report import render_plan
from .core.tasks import Task, limit_tasks, normalize_items
from .ports.classifier import TaskClassifier
from .ports.task_repo import TaskRepository, TaskSourceError

logger = logging.getLogger(__name__)


@dataclass
class SummaryResult:
    """A built plan, the number of tasks collected, and the rendered message."""

    plan: DailyPlan
    task_count: int
    text: str


def collect_tasks(repo: TaskRepository, include_completed: bool = False) -> list[Task]:
    """
    Fetch and normalize tasks from every list, one list at a time.

    A list that fails to load is skipped. Failing to enumerate the lists
    themselves propagates.
    """
    tasks = []
    for task_list in repo.list_tasklists():
        list_name = task_list.get("title") or ""
        try:
            items = repo.list_tasks(task_list["id"], show_completed=include_completed)
        except TaskSourceError as e:
            logger.warning(f"Skipping task list {list_name!r}: {e}")
            continue
        tasks.extend(normalize_items(items, list_name, include_completed))
    logger.info(f"Collected {len(tasks)} tasks")
    return tasks


def generate_summary(
    config: Config,
    repo: TaskRepository | None = None,
    classifier: TaskClassifier | None = None,
    as_of: date | None = None,
) -> SummaryResult:
    """Collect, enrich and schedule tasks, then render the daily message."""
    repo = repo or GoogleTasksAdapter(config)
    classifier = classifier or OpenAIClassifier(config)

    context = load_context(config)
    all_tasks = collect_tasks(repo, config.summary_include_completed)
    limited = limit_tasks(all_tasks, config.summary_max_tasks)

    enriched = enrich_tasks(limited, classifier.classify, context, config.category_list)
    plan = assemble_plan(enriched, context.top_priorities, as_of=as_of)
    logger.info(
        f"Built plan for {plan.date}: {len(plan.todays_focus)} focus, "
        f"{len(plan.deferred)} deferred, {len(plan.overdue)} overdue"
    )

    text = render_plan(plan, max_tasks=config.summary_max_tasks)
    return SummaryResult(plan=plan, task_count=len(all_tasks), text=text)


def record_feedback(config: Config, chat_id: str, feedback: str) -> dict:
    """Store prioritization feedback for future classification prompts."""
    return get_feedback_store(config).append(chat_id, feedback)
