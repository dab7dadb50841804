"""Shared fixtures and factories."""

from datetime import date

import pytest

from taskbrief.core.enrichment import EnrichedTask, Enrichment
from taskbrief.core.tasks import Task


def make_enriched(
    id: str,
    estimate: str = "30 minutes",
    score: int = 1,
    due: str | None = None,
    area: str | None = None,
    workstream: str | None = None,
    complexity: int = 3,
    title: str | None = None,
) -> EnrichedTask:
    task = Task(id=id, title=title or f"Task {id}", due_date=due, list_name="Work")
    enrichment = Enrichment(
        time_estimate=estimate,
        priority_score=score,
        priority_area=area,
        workstream=workstream,
        complexity=complexity,
    )
    return EnrichedTask.build(task, enrichment)


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def yesterday():
    return "2025-01-14"
