"""taskbrief Telegram bot."""

import asyncio
import logging

from telegram import Bot, Update
from telegram.ext import Application, CommandHandler, MessageHandler, filters
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .config import Config, load_config
from .telegram_format import send_text
from .telegram_handlers import feedback_handler, help_handler, start_handler, summary_handler
from .workflows import generate_summary

logger = logging.getLogger(__name__)


class AuthFilter(filters.BaseFilter):
    """Filter to only allow authorized users."""

    def __init__(self, allowed_users: list[int]):
        super().__init__()
        self.allowed_users = allowed_users

    def check_update(self, update: Update) -> bool:
        if not self.allowed_users:
            return True  # No restriction if no users configured
        user = update.effective_user
        if user is None:
            return False
        return user.id in self.allowed_users


def create_application(config: Config | None = None) -> Application:
    """Create and configure the Telegram bot application."""
    if config is None:
        config = load_config()

    if not config.telegram_bot_token:
        raise ValueError(
            "TELEGRAM_BOT_TOKEN not configured. "
            "Get a token from @BotFather on Telegram and add it to taskbrief.conf"
        )

    app = Application.builder().token(config.telegram_bot_token).build()
    auth_filter = AuthFilter(config.telegram_allowed_users)

    app.add_handler(CommandHandler("start", start_handler, filters=auth_filter))
    app.add_handler(CommandHandler("help", help_handler, filters=auth_filter))
    app.add_handler(CommandHandler("summary", summary_handler, filters=auth_filter))
    app.add_handler(CommandHandler("feedback", feedback_handler, filters=auth_filter))

    async def unauthorized_handler(update: Update, context):
        user = update.effective_user
        logger.warning(f"Unauthorized access attempt from user {user.id} ({user.username})")
        await update.message.reply_text(
            "Unauthorized. This bot is private.\n"
            "If you're the owner, add your Telegram user ID to TELEGRAM_ALLOWED_USERS in taskbrief.conf"
        )

    if config.telegram_allowed_users:
        app.add_handler(MessageHandler(~auth_filter & filters.ALL, unauthorized_handler))

    return app


def summary_recipients(config: Config) -> list[int | str]:
    """The configured summary chat, else every allowed user."""
    if config.summary_chat_id:
        return [config.summary_chat_id]
    return list(config.telegram_allowed_users)


def setup_scheduler(app: Application, config: Config | None = None) -> AsyncIOScheduler:
    """Set up the scheduled daily summary."""
    if config is None:
        config = load_config()

    scheduler = AsyncIOScheduler(timezone=config.timezone or "UTC")
    recipients = summary_recipients(config)

    if not config.summary_enabled:
        logger.info("Daily summary disabled")
    elif config.summary_time and recipients:
        try:
            hour, minute = map(int, config.summary_time.split(":"))
            scheduler.add_job(
                send_scheduled_summary,
                CronTrigger(hour=hour, minute=minute),
                args=[app.bot, recipients, config],
                id="daily_summary",
            )
            logger.info(f"Scheduled daily summary at {hour:02d}:{minute:02d}")
        except ValueError:
            logger.warning(f"Invalid summary time format: {config.summary_time}")

    return scheduler


async def send_scheduled_summary(bot: Bot, chat_ids: list[int | str], config: Config):
    """Build the daily summary once and send it to every recipient."""
    logger.info("Sending scheduled daily summary")

    try:
        result = await asyncio.to_thread(generate_summary, config)
    except Exception as e:
        logger.error(f"Error generating daily summary: {e}")
        return

    for chat_id in chat_ids:
        try:
            await send_text(bot, result.text, chat_id=chat_id)
        except Exception as e:
            logger.error(f"Failed to send summary to chat {chat_id}: {e}")


def deliver(config: Config, chat_id: int | str, text: str) -> None:
    """Send text to one chat outside the polling loop (used by the CLI)."""
    if not config.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN not configured")

    async def _send():
        async with Bot(config.telegram_bot_token) as bot:
            await send_text(bot, text, chat_id=chat_id)

    asyncio.run(_send())


def run_bot():
    """Run the Telegram bot."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
        force=True,
    )

    config = load_config()
    app = create_application(config)
    scheduler = setup_scheduler(app, config)

    async def post_init(application: Application) -> None:
        """Start scheduler after event loop is running."""
        scheduler.start()
        logger.info("Scheduler started")

    app.post_init = post_init

    if config.telegram_allowed_users:
        logger.info(f"Bot authorized for users: {config.telegram_allowed_users}")
    else:
        logger.warning("No TELEGRAM_ALLOWED_USERS configured - bot is open to anyone!")

    logger.info("Starting taskbrief Telegram bot...")
    app.run_polling(allowed_updates=Update.ALL_TYPES)
