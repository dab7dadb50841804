"""OpenAI chat completions adapter - classifies task batches."""

import json
import logging

import requests

from taskbrief.config import Config, load_config
from taskbrief.core.context import Context
from taskbrief.ports.classifier import EnrichmentError

logger = logging.getLogger(__name__)

API_BASE = "https://api.openai.com/v1"

RESPONSE_EXAMPLE = """{
  "results": [
    {
      "id": "task id",
      "timeEstimate": "45 minutes",
      "priorityScore": 3,
      "priorityArea": "People & HR (hiring, EVP, onboarding, L&D)",
      "workstream": "Human Resources & Talent",
      "complexity": 3,
      "strategicImpact": "Builds organizational capacity to serve more charities",
      "tips": "Break into smaller steps, start with research phase",
      "category": "HR"
    }
  ]
}"""


def _numbered(items: list[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1)) or "None"


def build_system_prompt(context: Context, categories: list[str]) -> str:
    """Compile the classification system prompt from the context."""
    feedback = ""
    if context.recent_feedback:
        entries = "\n".join(f"- {f}" for f in context.recent_feedback)
        feedback = (
            f"\n\nRECENT FEEDBACK FOR IMPROVEMENT:\n{entries}\n"
            "Apply this feedback to improve future task prioritization."
        )

    return f"""You are a productivity assistant analyzing tasks for daily planning.

ORGANIZATIONAL CONTEXT:
Mission: {context.mission_statement}

KEY METRICS:
{_numbered(context.key_metrics)}

TOP PRIORITIES:
{_numbered(context.top_priorities)}

CORE WORKSTREAMS:
{_numbered(context.core_workstreams)}{feedback}

For each task, provide:
1. Time estimate (realistic completion time in minutes or hours)
2. Priority score (1-3): 3=directly advances the mission or top priorities, 2=supports key metrics/workstreams, 1=general operational work
3. Priority area (which top priority it aligns with, copied exactly, if any)
4. Workstream (which core workstream this task belongs to)
5. Complexity score (1-5)
6. Strategic impact (how this task advances the mission)
7. Quick completion tips
8. Category, exactly one of: {json.dumps(categories)}

Consider due dates and urgency, task complexity and scope, previous feedback,
and realistic human working patterns.

Return a JSON object with a "results" array, one object per task, in the same order:
{RESPONSE_EXAMPLE}"""


class OpenAIClassifier:
    """
    OpenAI chat completions adapter.

    Implements TaskClassifier protocol. One HTTP request per batch; any
    non-200 response or transport failure raises EnrichmentError.
    """

    def __init__(self, config: Config | None = None, timeout: int = 120):
        self.config = config or load_config()
        self.timeout = timeout
        self._session = requests.Session()

    def classify(self, batch: list[dict], context: Context) -> str:
        """Classify one batch. Returns the raw message content."""
        if not self.config.openai_api_key:
            raise EnrichmentError("OPENAI_API_KEY not configured")

        payload = {
            "model": self.config.openai_model,
            "messages": [
                {"role": "system", "content": build_system_prompt(context, self.config.category_list)},
                {
                    "role": "user",
                    "content": (
                        "Analyze these tasks and return an array of JSON objects, one per task, "
                        f"in the same order. Tasks: {json.dumps(batch)}"
                    ),
                },
            ],
            "response_format": {"type": "json_object"},
        }

        try:
            resp = self._session.post(
                f"{API_BASE}/chat/completions",
                headers={"Authorization": f"Bearer {self.config.openai_api_key}"},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EnrichmentError(f"OpenAI request failed: {e}") from e

        if resp.status_code != 200:
            logger.error(f"OpenAI analysis failed with status {resp.status_code}")
            raise EnrichmentError(f"OpenAI analysis error: {resp.text}")

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            return "{}"
        return content or "{}"
