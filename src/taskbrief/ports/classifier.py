"""Task classifier interface."""

from typing import Any, Protocol

from taskbrief.core.context import Context


class EnrichmentError(Exception):
    """Raised when the classifier call does not succeed."""

    pass


class TaskClassifier(Protocol):
    """Interface for the external service that enriches task batches."""

    def classify(self, batch: list[dict], context: Context) -> Any:
        """Classify one batch. Returns JSON text or a decoded list/dict."""
        ...
