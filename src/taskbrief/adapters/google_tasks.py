"""Google Tasks API adapter."""

import logging
from pathlib import Path

from taskbrief.config import TOKEN_FILE, Config, load_config
from taskbrief.ports.task_repo import TaskSourceError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/tasks"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
PAGE_SIZE = 100


class AuthenticationError(Exception):
    """Raised when Google credentials are missing or cannot be refreshed."""

    pass


class GoogleTasksAdapter:
    """
    Google Tasks adapter.

    Implements TaskRepository protocol. Credentials come from the configured
    refresh token, else from the token file written by 'taskbrief google-auth'.
    No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, token_path: Path | str | None = None):
        self.config = config or load_config()
        self._token_path = Path(token_path).expanduser() if token_path else TOKEN_FILE
        self._service = None

    def _get_credentials(self):
        """Build credentials and refresh them if needed."""
        from google.auth.exceptions import RefreshError
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        from_file = False
        if self.config.google_refresh_token:
            creds = Credentials(
                None,
                refresh_token=self.config.google_refresh_token,
                token_uri=TOKEN_URI,
                client_id=self.config.google_client_id,
                client_secret=self.config.google_client_secret,
                scopes=SCOPES,
            )
        elif self._token_path.exists():
            creds = Credentials.from_authorized_user_file(str(self._token_path), SCOPES)
            from_file = True
        else:
            raise AuthenticationError(
                "No Google credentials. Set GOOGLE_REFRESH_TOKEN or run 'taskbrief google-auth'."
            )

        if not creds.valid:
            if not creds.refresh_token:
                raise AuthenticationError("No Google refresh token. Run 'taskbrief google-auth'.")
            try:
                creds.refresh(Request())
            except RefreshError as e:
                raise AuthenticationError(f"Google token refresh failed: {e}") from e
            if from_file:
                self._token_path.write_text(creds.to_json())
                self._token_path.chmod(0o600)

        return creds

    def _build_service(self):
        """Build a Google Tasks API service."""
        from googleapiclient.discovery import build

        creds = self._get_credentials()
        return build("tasks", "v1", credentials=creds, cache_discovery=False)

    @property
    def service(self):
        if self._service is None:
            self._service = self._build_service()
        return self._service

    def list_tasklists(self) -> list[dict]:
        """List all task lists."""
        lists = []
        page_token = None
        try:
            while True:
                result = self.service.tasklists().list(maxResults=PAGE_SIZE, pageToken=page_token).execute()
                lists.extend(result.get("items", []))
                page_token = result.get("nextPageToken")
                if not page_token:
                    break
        except AuthenticationError:
            raise
        except Exception as e:
            raise TaskSourceError(f"Failed to list tasklists: {e}") from e
        return lists

    def list_tasks(self, list_id: str, show_completed: bool = False) -> list[dict]:
        """Raw task items of one list, following pagination."""
        items = []
        page_token = None
        try:
            while True:
                result = (
                    self.service.tasks()
                    .list(
                        tasklist=list_id,
                        showCompleted=show_completed,
                        showHidden=show_completed,
                        maxResults=PAGE_SIZE,
                        pageToken=page_token,
                    )
                    .execute()
                )
                items.extend(result.get("items", []))
                page_token = result.get("nextPageToken")
                if not page_token:
                    break
        except AuthenticationError:
            raise
        except Exception as e:
            raise TaskSourceError(f"Failed to fetch tasks for list {list_id}: {e}") from e
        return items


def authenticate(config: Config | None = None, token_path: Path | str | None = None) -> Path:
    """Run the installed-app OAuth flow and save the token file. Returns its path."""
    from google_auth_oauthlib.flow import InstalledAppFlow

    config = config or load_config()
    if not config.google_client_secret_file:
        raise AuthenticationError(
            "Missing GOOGLE_CLIENT_SECRET_FILE. Add it to config/taskbrief.conf"
        )

    secret_path = Path(config.google_client_secret_file).expanduser()
    if not secret_path.exists():
        raise AuthenticationError(f"Client secret file not found: {secret_path}")

    flow = InstalledAppFlow.from_client_secrets_file(str(secret_path), SCOPES)
    creds = flow.run_local_server(port=0)

    path = Path(token_path).expanduser() if token_path else TOKEN_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(creds.to_json())
    path.chmod(0o600)
    logger.info(f"Saved Google token to {path}")
    return path
