"""Tests for Telegram handlers, scheduling and message sending."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from taskbrief.config import Config
from taskbrief.ports.classifier import EnrichmentError
from taskbrief.telegram_bot import AuthFilter, send_scheduled_summary, setup_scheduler, summary_recipients
from taskbrief.telegram_format import TELEGRAM_CHUNK_SIZE, send_text
from taskbrief.telegram_handlers import feedback_handler, summary_handler


def make_update(chat_id: int = 42):
    message = MagicMock()
    message.reply_text = AsyncMock()
    return SimpleNamespace(message=message, effective_chat=SimpleNamespace(id=chat_id))


class TestSendText:
    def test_reply_in_chunks(self):
        message = MagicMock()
        message.reply_text = AsyncMock()

        asyncio.run(send_text(message, "x" * (TELEGRAM_CHUNK_SIZE + 10)))

        assert message.reply_text.await_count == 2

    def test_send_to_chat(self):
        bot = MagicMock()
        bot.send_message = AsyncMock()

        asyncio.run(send_text(bot, "hello", chat_id=7))

        bot.send_message.assert_awaited_once_with(chat_id=7, text="hello")


class TestSummaryHandler:
    @patch("taskbrief.telegram_handlers.load_config", return_value=Config())
    @patch("taskbrief.telegram_handlers.generate_summary")
    def test_sends_summary(self, mock_generate, _mock_config):
        mock_generate.return_value = SimpleNamespace(text="the summary")
        update = make_update()

        asyncio.run(summary_handler(update, SimpleNamespace(args=[])))

        texts = [c.args[0] for c in update.message.reply_text.await_args_list]
        assert texts == ["Building your daily summary...", "the summary"]

    @patch("taskbrief.telegram_handlers.load_config", return_value=Config())
    @patch("taskbrief.telegram_handlers.generate_summary")
    def test_reports_failure(self, mock_generate, _mock_config):
        mock_generate.side_effect = EnrichmentError("OpenAI analysis error: 500")
        update = make_update()

        asyncio.run(summary_handler(update, SimpleNamespace(args=[])))

        last = update.message.reply_text.await_args_list[-1].args[0]
        assert last == "Failed to build summary: OpenAI analysis error: 500"


class TestFeedbackHandler:
    def test_usage_without_text(self):
        update = make_update()

        asyncio.run(feedback_handler(update, SimpleNamespace(args=[])))

        assert update.message.reply_text.await_args.args[0].startswith("Usage: /feedback")

    @patch("taskbrief.telegram_handlers.record_feedback")
    @patch("taskbrief.telegram_handlers.load_config")
    def test_stores_feedback(self, mock_config, mock_record):
        mock_record.return_value = {"id": "1"}
        update = make_update(chat_id=99)

        asyncio.run(feedback_handler(update, SimpleNamespace(args=["more", "finance"])))

        mock_record.assert_called_once_with(mock_config.return_value, "99", "more finance")
        assert update.message.reply_text.await_args.args[0].startswith("Thanks!")


class TestScheduling:
    def test_recipients_prefer_chat_id(self):
        config = Config(summary_chat_id="123", telegram_allowed_users=[1, 2])
        assert summary_recipients(config) == ["123"]

    def test_recipients_fall_back_to_allowed_users(self):
        assert summary_recipients(Config(telegram_allowed_users=[1, 2])) == [1, 2]

    def test_job_scheduled(self):
        app = MagicMock()
        config = Config(summary_chat_id="123", summary_time="06:45")

        scheduler = setup_scheduler(app, config)

        job = scheduler.get_job("daily_summary")
        assert job is not None
        assert job.args[1] == ["123"]

    def test_disabled(self):
        config = Config(summary_chat_id="123", summary_enabled=False)
        assert setup_scheduler(MagicMock(), config).get_job("daily_summary") is None

    def test_invalid_time(self):
        config = Config(summary_chat_id="123", summary_time="seven")
        assert setup_scheduler(MagicMock(), config).get_job("daily_summary") is None

    @patch("taskbrief.telegram_bot.generate_summary")
    def test_scheduled_summary_sent_to_each_chat(self, mock_generate):
        mock_generate.return_value = SimpleNamespace(text="brief")
        bot = MagicMock()
        bot.send_message = AsyncMock()

        asyncio.run(send_scheduled_summary(bot, [1, 2], Config()))

        assert [c.kwargs["chat_id"] for c in bot.send_message.await_args_list] == [1, 2]
        mock_generate.assert_called_once()


class TestAuthFilter:
    def test_open_when_no_users(self):
        assert AuthFilter([]).check_update(MagicMock()) is True

    def test_allowed_user(self):
        update = SimpleNamespace(effective_user=SimpleNamespace(id=5))
        assert AuthFilter([5]).check_update(update) is True

    def test_other_user(self):
        update = SimpleNamespace(effective_user=SimpleNamespace(id=6))
        assert AuthFilter([5]).check_update(update) is False
