"""Telegram command handlers."""

import asyncio
import logging

from telegram import Update
from telegram.ext import ContextTypes

from .adapters.google_tasks import AuthenticationError
from .config import load_config
from .ports.classifier import EnrichmentError
from .ports.task_repo import TaskSourceError
from .telegram_format import send_text
from .workflows import generate_summary, record_feedback

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "/summary - Build today's prioritized task summary\n"
    "/feedback <text> - Tell me how to prioritize better\n"
    "/help - Show all commands"
)


async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text(
        "Hi! I build a daily summary of your open tasks that fits a 12-hour day.\n\n" + HELP_TEXT
    )


async def help_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    await update.message.reply_text(HELP_TEXT)


async def summary_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /summary command - build and send the daily summary."""
    await update.message.reply_text("Building your daily summary...")
    config = load_config()

    try:
        result = await asyncio.to_thread(generate_summary, config)
    except (AuthenticationError, TaskSourceError, EnrichmentError) as e:
        logger.error(f"Summary failed: {e}")
        await update.message.reply_text(f"Failed to build summary: {e}")
        return

    await send_text(update.message, result.text)


async def feedback_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /feedback command - store prioritization feedback."""
    text = " ".join(context.args or []).strip()
    if not text:
        await update.message.reply_text("Usage: /feedback <what should be prioritized differently>")
        return

    config = load_config()
    entry = record_feedback(config, str(update.effective_chat.id), text)
    logger.info(f"Feedback {entry['id']} stored from chat {update.effective_chat.id}")
    await update.message.reply_text(
        "Thanks! Feedback stored and will be used to improve future prioritization."
    )
