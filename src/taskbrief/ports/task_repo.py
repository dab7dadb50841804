"""Task repository interface."""

from typing import Protocol


class TaskSourceError(Exception):
    """Raised when a task list cannot be enumerated."""

    pass


class TaskRepository(Protocol):
    """Interface for reading task lists and their raw items from any backend."""

    def list_tasklists(self) -> list[dict]:
        """List task collections as raw dicts with at least 'id' and 'title'."""
        ...

    def list_tasks(self, list_id: str, show_completed: bool = False) -> list[dict]:
        """Raw items of one list. Raises TaskSourceError on failure."""
        ...
