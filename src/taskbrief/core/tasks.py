"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

DEFAULT_TITLE = "Untitled"
DEFAULT_LIST_NAME = "Tasks"


@dataclass(frozen=True)
class Task:
    """A normalized task from any task store."""

    id: str
    title: str
    notes: str = ""
    due_date: str | None = None  # YYYY-MM-DD
    list_name: str = DEFAULT_LIST_NAME

    def due(self) -> date | None:
        """Due date as a date object, or None if absent or malformed."""
        if not self.due_date:
            return None
        try:
            return date.fromisoformat(self.due_date)
        except ValueError:
            return None

    def is_overdue(self, as_of: date) -> bool:
        """Due strictly before the anchor date."""
        due = self.due()
        return due is not None and due < as_of

    def is_due_today(self, as_of: date) -> bool:
        return self.due() == as_of

    def to_payload(self) -> dict:
        """Shape sent to the classifier."""
        return {
            "id": self.id,
            "title": self.title,
            "notes": self.notes,
            "dueDate": self.due_date,
            "listName": self.list_name,
        }

    @classmethod
    def from_api(cls, data: dict, list_name: str = "") -> "Task":
        """Create Task from a raw task-store item."""
        due = data.get("due")
        return cls(
            id=data.get("id", ""),
            title=data.get("title") or DEFAULT_TITLE,
            notes=data.get("notes") or "",
            due_date=due[:10] if due else None,
            list_name=list_name or DEFAULT_LIST_NAME,
        )


def is_completed(data: dict) -> bool:
    return (data.get("status") or "").lower() == "completed"


def normalize_items(
    items: Iterable[dict],
    list_name: str = "",
    include_completed: bool = False,
) -> list[Task]:
    """
    Normalize raw items from one task list.

    Pure function - no I/O.
    """
    return [
        Task.from_api(item, list_name)
        for item in items
        if include_completed or not is_completed(item)
    ]


def normalize_lists(
    lists: Iterable[tuple[str, Iterable[dict]]],
    include_completed: bool = False,
) -> list[Task]:
    """
    Normalize (list_name, items) pairs, keeping list order then item order.

    Pure function - no I/O.
    """
    tasks = []
    for list_name, items in lists:
        tasks.extend(normalize_items(items, list_name, include_completed))
    return tasks


def limit_tasks(tasks: list[Task], max_tasks: int = 0) -> list[Task]:
    """Truncate to the first N tasks (0 = unlimited)."""
    if max_tasks > 0:
        return tasks[:max_tasks]
    return tasks
