"""Organizational context used to bias task classification."""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable

logger = logging.getLogger(__name__)

RECENT_FEEDBACK_LIMIT = 5

DEFAULT_MISSION = (
    "To strengthen the charitable sector by building capacity, increasing transparency, "
    "and improving accountability"
)
DEFAULT_KEY_METRICS = [
    "Staff retention and development",
    "Revenue growth and sustainability",
    "Operational efficiency",
    "Stakeholder satisfaction",
    "Strategic initiatives completion",
]
DEFAULT_TOP_PRIORITIES = [
    "People & HR (hiring, EVP, onboarding, L&D)",
    "Leadership Council (fundraising & funder engagement)",
    "CRM backbone (staffing, BD, finance integration)",
]
DEFAULT_WORKSTREAMS = [
    "Human Resources & Talent",
    "Financial Operations & Compliance",
    "Business Development & Partnerships",
]


@dataclass(frozen=True)
class Context:
    """Priorities, workstreams and feedback that shape classification."""

    mission_statement: str = ""
    key_metrics: list[str] = field(default_factory=list)
    top_priorities: list[str] = field(default_factory=list)
    core_workstreams: list[str] = field(default_factory=list)
    recent_feedback: list[str] = field(default_factory=list)

    def with_feedback(self, feedback: Iterable[str]) -> "Context":
        """Copy with the most recent feedback entries attached."""
        entries = list(feedback)[-RECENT_FEEDBACK_LIMIT:]
        return replace(self, recent_feedback=entries)


def default_context() -> Context:
    """Built-in context used when no context source is available."""
    return Context(
        mission_statement=DEFAULT_MISSION,
        key_metrics=list(DEFAULT_KEY_METRICS),
        top_priorities=list(DEFAULT_TOP_PRIORITIES),
        core_workstreams=list(DEFAULT_WORKSTREAMS),
    )


ContextLoader = Callable[[], "Context | None"]


def resolve_context(loaders: Iterable[ContextLoader]) -> Context:
    """
    Return the first context a loader produces, else the built-in default.

    Loaders are tried in order; a loader returns None when its source is absent.
    """
    for loader in loaders:
        context = loader()
        if context is not None:
            return context
    logger.info("Using default context (no context sources found)")
    return default_context()
