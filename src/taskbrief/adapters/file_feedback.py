"""File-based feedback storage adapter."""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50


class FileFeedbackStore:
    """
    JSON file feedback log.

    Implements FeedbackStore protocol. Keeps the most recent MAX_ENTRIES
    entries under a top-level "feedback" key.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> list[dict]:
        """All stored entries, oldest first. Missing or corrupt files read as empty."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read feedback log {self.path}: {e}")
            return []
        entries = data.get("feedback") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            return []
        return [e for e in entries if isinstance(e, dict)]

    def recent(self, limit: int = 5) -> list[str]:
        """Most recent entries formatted as '<feedback> (Task: <title>)'."""
        entries = self.load()[-limit:] if limit > 0 else []
        return [f"{e.get('feedback', '')} (Task: {e.get('task_title', 'General feedback')})" for e in entries]

    def append(self, chat_id: str, feedback: str, task_title: str = "General feedback") -> dict:
        """Store a feedback entry and return it."""
        entries = self.load()
        entry = {
            "id": str(int(time.time() * 1000)),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "chat_id": str(chat_id),
            "feedback": feedback,
            "task_title": task_title,
            "processed": False,
        }
        entries.append(entry)
        entries = entries[-MAX_ENTRIES:]

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"feedback": entries}, indent=2))
        logger.info(f"Stored feedback {entry['id']}")
        return entry
