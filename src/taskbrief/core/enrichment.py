"""Enrichment batching and defaulting - no I/O, the classifier is injected."""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .context import Context
from .durations import parse_minutes
from .tasks import Task

logger = logging.getLogger(__name__)

BATCH_SIZE = 15
FALLBACK_CATEGORY = "General Operations"
DEFAULT_CATEGORIES = [
    "Personal",
    "Charities Unit",
    "Onboarding",
    "Learning & Development (L&D)",
    "Finance",
    "HR",
    "Staffing",
    "Knowledge Management (KM)",
    FALLBACK_CATEGORY,
]

# Receives the classifier payload for one batch and the context. Returns the raw
# response: JSON text, or an already decoded list/dict.
Classify = Callable[[list[dict], Context], Any]


def _as_int(value: Any, default: int) -> int:
    """Coerce a classifier number, falling back to default for falsy or non-numeric values."""
    if not value:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number)


def _as_text(value: Any) -> str | None:
    if not value:
        return None
    return str(value)


def validate_category(candidate: Any, allowed: Iterable[str]) -> str:
    """Return candidate if it is an allowed category, else the fallback label."""
    allowed_set = set(allowed)
    if isinstance(candidate, str) and candidate in allowed_set:
        return candidate
    return FALLBACK_CATEGORY


@dataclass(frozen=True)
class Enrichment:
    """Classifier output for one task, with defaults applied."""

    time_estimate: str = "30 minutes"
    priority: str = "Medium"
    priority_score: int = 1
    priority_area: str | None = None
    workstream: str | None = None
    complexity: int = 3
    strategic_impact: str | None = None
    tips: str = ""
    category: str = FALLBACK_CATEGORY

    @classmethod
    def from_result(cls, data: Any, allowed_categories: Iterable[str]) -> "Enrichment":
        """Build from one untrusted classifier result object."""
        if not isinstance(data, dict):
            data = {}
        return cls(
            time_estimate=_as_text(data.get("timeEstimate")) or "30 minutes",
            priority=_as_text(data.get("priority")) or "Medium",
            priority_score=_as_int(data.get("priorityScore"), 1),
            priority_area=_as_text(data.get("priorityArea")),
            workstream=_as_text(data.get("workstream")),
            complexity=_as_int(data.get("complexity"), 3),
            strategic_impact=_as_text(data.get("strategicImpact")),
            tips=_as_text(data.get("tips")) or "",
            category=validate_category(data.get("category"), allowed_categories),
        )

    def to_dict(self) -> dict:
        return {
            "timeEstimate": self.time_estimate,
            "priority": self.priority,
            "priorityScore": self.priority_score,
            "priorityArea": self.priority_area,
            "workstream": self.workstream,
            "complexity": self.complexity,
            "strategicImpact": self.strategic_impact,
            "tips": self.tips,
        }


@dataclass(frozen=True)
class EnrichedTask:
    """A task, its enrichment and the parsed minute estimate."""

    task: Task
    enrichment: Enrichment
    minutes: int

    @classmethod
    def build(cls, task: Task, enrichment: Enrichment) -> "EnrichedTask":
        return cls(task=task, enrichment=enrichment, minutes=parse_minutes(enrichment.time_estimate))

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def due_date(self) -> str | None:
        return self.task.due_date

    @property
    def priority_score(self) -> int:
        return self.enrichment.priority_score

    def to_dict(self) -> dict:
        return {
            **self.task.to_payload(),
            "analysis": self.enrichment.to_dict(),
            "category": self.enrichment.category,
            "minutes": self.minutes,
        }


def chunk(tasks: list[Task], size: int = BATCH_SIZE) -> list[list[Task]]:
    """Split into contiguous, order-preserving chunks."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    return [tasks[i : i + size] for i in range(0, len(tasks), size)]


def extract_results(response: Any) -> list:
    """
    Pull the per-task result list out of a classifier response.

    Accepts a bare array or one nested under "results" or "tasks". Text that
    is not valid JSON counts as an empty object.
    """
    parsed = response
    if isinstance(response, (str, bytes)):
        try:
            parsed = json.loads(response or "{}")
        except ValueError:
            logger.warning("Classifier returned malformed JSON; using defaults for batch")
            parsed = {}

    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        results = parsed.get("results") or parsed.get("tasks") or []
        if isinstance(results, list):
            return results
    return []


def enrich_tasks(
    tasks: list[Task],
    classify: Classify,
    context: Context,
    allowed_categories: Iterable[str] = DEFAULT_CATEGORIES,
    batch_size: int = BATCH_SIZE,
) -> list[EnrichedTask]:
    """
    Classify tasks batch by batch and merge the results in input order.

    Batches run strictly one after another. Any exception from classify aborts
    the whole run.
    """
    allowed = list(allowed_categories)
    enriched = []
    batches = chunk(tasks, batch_size)
    for index, batch in enumerate(batches, start=1):
        logger.info(f"Classifying batch {index}/{len(batches)} ({len(batch)} tasks)")
        response = classify([t.to_payload() for t in batch], context)
        results = extract_results(response)
        for i, task in enumerate(batch):
            result = results[i] if i < len(results) else {}
            enriched.append(EnrichedTask.build(task, Enrichment.from_result(result, allowed)))
    return enriched
