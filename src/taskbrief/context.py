"""Context loading from the context directory.

Resolution order: context.json (full) -> priorities.json (legacy, priorities
only) -> built-in defaults. Recent feedback is attached whichever tier wins.
"""

import json
import logging
from functools import partial
from pathlib import Path

from .adapters.file_feedback import FileFeedbackStore
from .config import Config
from .core.context import RECENT_FEEDBACK_LIMIT, Context, resolve_context

logger = logging.getLogger(__name__)

CONTEXT_FILE = "context.json"
LEGACY_PRIORITIES_FILE = "priorities.json"
FEEDBACK_FILE = "feedback_log.json"

LEGACY_MISSION = "Legacy mode - full context not available"


def _read_json(path: Path) -> dict | None:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read {path.name}: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"{path.name} must contain a JSON object")
        return None
    return data


def _str_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def load_full_context(context_dir: Path) -> Context | None:
    """Load context.json, or None if missing or unreadable."""
    data = _read_json(context_dir / CONTEXT_FILE)
    if data is None:
        return None
    return Context(
        mission_statement=str(data.get("mission_statement") or ""),
        key_metrics=_str_list(data.get("key_metrics")),
        top_priorities=_str_list(data.get("top_priorities")),
        core_workstreams=_str_list(data.get("core_workstreams")),
    )


def load_legacy_context(context_dir: Path) -> Context | None:
    """Load priorities.json (top priorities only), or None if missing or unreadable."""
    data = _read_json(context_dir / LEGACY_PRIORITIES_FILE)
    if data is None:
        return None
    logger.warning(f"Using legacy {LEGACY_PRIORITIES_FILE} - consider upgrading to {CONTEXT_FILE}")
    return Context(
        mission_statement=LEGACY_MISSION,
        top_priorities=_str_list(data.get("top_priorities")),
    )


def get_feedback_store(config: Config) -> FileFeedbackStore:
    return FileFeedbackStore(config.context_path / FEEDBACK_FILE)


def load_context(config: Config) -> Context:
    """Resolve the context for one run. Never fails."""
    context_dir = config.context_path
    context = resolve_context(
        [
            partial(load_full_context, context_dir),
            partial(load_legacy_context, context_dir),
        ]
    )
    feedback = get_feedback_store(config).recent(RECENT_FEEDBACK_LIMIT)
    return context.with_feedback(feedback)
