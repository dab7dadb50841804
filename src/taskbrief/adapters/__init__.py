"""Adapters - I/O implementations of ports."""

from .google_tasks import GoogleTasksAdapter, AuthenticationError
from .openai_classifier import OpenAIClassifier
from .file_feedback import FileFeedbackStore

__all__ = [
    "GoogleTasksAdapter",
    "AuthenticationError",
    "OpenAIClassifier",
    "FileFeedbackStore",
]
