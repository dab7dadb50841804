"""Feedback storage interface."""

from typing import Protocol


class FeedbackStore(Protocol):
    """Interface for reading and appending prioritization feedback."""

    def recent(self, limit: int = 5) -> list[str]:
        """Most recent feedback entries, formatted for a prompt, oldest first."""
        ...

    def append(self, chat_id: str, feedback: str, task_title: str = "General feedback") -> dict:
        """Store a feedback entry and return it."""
        ...
