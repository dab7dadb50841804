"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskRepository, TaskSourceError
from .classifier import TaskClassifier, EnrichmentError
from .feedback_store import FeedbackStore

__all__ = [
    "TaskRepository",
    "TaskSourceError",
    "TaskClassifier",
    "EnrichmentError",
    "FeedbackStore",
]
