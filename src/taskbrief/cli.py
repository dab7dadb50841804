"""taskbrief CLI - daily task prioritization."""

import json
import logging
import sys
from dataclasses import asdict

import click

from .adapters.google_tasks import AuthenticationError, GoogleTasksAdapter, authenticate
from .config import load_config
from .context import load_context
from .ports.classifier import EnrichmentError
from .ports.task_repo import TaskSourceError
from .workflows import generate_summary, record_feedback


@click.group()
@click.version_option(package_name="taskbrief")
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline progress to stderr")
def main(verbose: bool):
    """taskbrief - prioritized daily task summaries."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO if verbose else logging.WARNING,
    )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output the plan as JSON")
@click.option("--send", "chat_id", default=None, help="Also send the summary to this Telegram chat")
def summary(as_json: bool, chat_id: str | None):
    """Build today's prioritized task summary."""
    config = load_config()
    try:
        result = generate_summary(config)
    except (AuthenticationError, TaskSourceError, EnrichmentError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                {"success": True, "summary": result.plan.to_dict(), "taskCount": result.task_count},
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        click.echo(result.text)

    if chat_id:
        from telegram.error import TelegramError

        from .telegram_bot import deliver

        try:
            deliver(config, chat_id, result.text)
        except (ValueError, TelegramError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def lists(as_json: bool):
    """List task lists with their IDs."""
    try:
        task_lists = GoogleTasksAdapter().list_tasklists()
    except (AuthenticationError, TaskSourceError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(
            json.dumps(
                [{"name": tl.get("title", ""), "id": tl.get("id", "")} for tl in task_lists],
                indent=2,
            )
        )
        return

    if not task_lists:
        click.echo("No task lists.")
        return

    for tl in task_lists:
        click.echo(f"{tl.get('title', ''):30} {tl.get('id', '')}")


@main.command()
def context():
    """Show the resolved prioritization context."""
    click.echo(json.dumps(asdict(load_context(load_config())), indent=2))


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.option("--chat-id", default="cli", help="Chat ID to record with the feedback")
def feedback(text: tuple[str, ...], chat_id: str):
    """Store prioritization feedback for future summaries."""
    entry = record_feedback(load_config(), chat_id, " ".join(text))
    click.echo(f"Feedback stored ({entry['id']})")


@main.command("google-auth")
def google_auth():
    """Authorize Google Tasks access and save the token."""
    try:
        path = authenticate()
    except AuthenticationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Authentication successful! Token saved to {path}")


@main.command()
def bot():
    """Run the Telegram bot with the scheduled daily summary."""
    from .telegram_bot import run_bot

    try:
        run_bot()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
