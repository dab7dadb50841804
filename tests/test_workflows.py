"""Tests for the shared workflow layer."""

import json
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from taskbrief.config import Config
from taskbrief.context import FEEDBACK_FILE
from taskbrief.ports.classifier import EnrichmentError
from taskbrief.ports.task_repo import TaskSourceError
from taskbrief.workflows import collect_tasks, generate_summary, record_feedback


class FakeRepo:
    """In-memory task repository."""

    def __init__(self, lists: dict[str, list[dict]], failing: set[str] | None = None):
        self.lists = lists
        self.failing = failing or set()
        self.requested: list[tuple[str, bool]] = []

    def list_tasklists(self) -> list[dict]:
        return [{"id": name.lower(), "title": name} for name in self.lists]

    def list_tasks(self, list_id: str, show_completed: bool = False) -> list[dict]:
        self.requested.append((list_id, show_completed))
        for name, items in self.lists.items():
            if name.lower() == list_id:
                if name in self.failing:
                    raise TaskSourceError(f"boom {name}")
                return items
        return []


class FakeClassifier:
    """Returns the same enrichment for every task and records batches."""

    def __init__(self, result: dict | None = None):
        self.result = result or {"timeEstimate": "1h", "priorityScore": 2}
        self.batches: list[list[dict]] = []

    def classify(self, batch, context):
        self.batches.append(batch)
        return json.dumps({"results": [self.result for _ in batch]})


@pytest.fixture
def config(tmp_path):
    return Config(context_dir=str(tmp_path))


@pytest.fixture
def repo():
    return FakeRepo(
        {
            "Work": [
                {"id": "w1", "title": "Budget review", "due": "2025-01-14T00:00:00.000Z"},
                {"id": "w2", "title": "Done", "status": "completed"},
            ],
            "Personal": [{"id": "p1", "title": "Dentist"}],
        }
    )


class TestCollectTasks:
    def test_collects_across_lists_in_order(self, repo):
        tasks = collect_tasks(repo)
        assert [(t.list_name, t.id) for t in tasks] == [("Work", "w1"), ("Personal", "p1")]

    def test_include_completed(self, repo):
        tasks = collect_tasks(repo, include_completed=True)

        assert [t.id for t in tasks] == ["w1", "w2", "p1"]
        assert repo.requested == [("work", True), ("personal", True)]

    def test_failing_list_skipped(self, repo):
        repo.failing = {"Work"}
        tasks = collect_tasks(repo)
        assert [t.id for t in tasks] == ["p1"]

    def test_enumeration_failure_propagates(self):
        repo = MagicMock()
        repo.list_tasklists.side_effect = TaskSourceError("no lists")

        with pytest.raises(TaskSourceError):
            collect_tasks(repo)


class TestGenerateSummary:
    def test_end_to_end(self, config, repo):
        classifier = FakeClassifier()

        result = generate_summary(config, repo=repo, classifier=classifier, as_of=date(2025, 1, 15))

        assert result.task_count == 2
        assert [t.id for t in result.plan.overdue] == ["w1"]
        assert [t.id for t in result.plan.todays_focus] == ["w1", "p1"]
        assert result.plan.focus_time == "2.0h"
        assert result.text.startswith("🌅 Daily Task Summary - Wednesday, Jan 15")
        assert "• Budget review (1h) - Overdue 🔴" in result.text

    def test_uses_context_priorities(self, config, repo, tmp_path):
        (tmp_path / "context.json").write_text(json.dumps({"top_priorities": ["Finance"]}))
        classifier = FakeClassifier({"timeEstimate": "1h", "priorityScore": 1, "priorityArea": "Finance"})

        result = generate_summary(config, repo=repo, classifier=classifier, as_of=date(2025, 1, 15))

        assert [c.priority for c in result.plan.priority_coverage] == ["Finance"]
        assert result.plan.priority_coverage[0].task_count == 2

    def test_max_tasks_limits_input(self, repo, tmp_path):
        config = Config(context_dir=str(tmp_path), summary_max_tasks=1)
        classifier = FakeClassifier()

        result = generate_summary(config, repo=repo, classifier=classifier, as_of=date(2025, 1, 15))

        assert result.task_count == 2
        assert result.plan.total_tasks == 1
        assert classifier.batches == [[{"id": "w1", "title": "Budget review", "notes": "", "dueDate": "2025-01-14", "listName": "Work"}]]

    def test_enrichment_failure_propagates(self, config, repo):
        classifier = MagicMock()
        classifier.classify.side_effect = EnrichmentError("OpenAI analysis error: 500")

        with pytest.raises(EnrichmentError):
            generate_summary(config, repo=repo, classifier=classifier)

    def test_no_tasks(self, config):
        classifier = FakeClassifier()

        result = generate_summary(config, repo=FakeRepo({}), classifier=classifier, as_of=date(2025, 1, 15))

        assert result.task_count == 0
        assert classifier.batches == []
        assert "• Focus Hours: 0min" in result.text

    @patch("taskbrief.workflows.OpenAIClassifier")
    @patch("taskbrief.workflows.GoogleTasksAdapter")
    def test_default_adapters(self, mock_repo_cls, mock_classifier_cls, config):
        mock_repo_cls.return_value = FakeRepo({})

        generate_summary(config, as_of=date(2025, 1, 15))

        mock_repo_cls.assert_called_once_with(config)
        mock_classifier_cls.assert_called_once_with(config)


class TestRecordFeedback:
    def test_appends_to_context_dir(self, config, tmp_path):
        entry = record_feedback(config, "42", "Admin tasks are overrated")

        data = json.loads((tmp_path / FEEDBACK_FILE).read_text())
        assert data["feedback"] == [entry]
        assert entry["feedback"] == "Admin tasks are overrated"
