"""Firebase Cloud Messaging client: app lifecycle and the blocking send call."""
import logging
from typing import Callable, Optional

import firebase_admin
from firebase_admin import credentials, messaging

from pushgate.credentials import read_project_id
from pushgate.domain.common.errors import CredentialsError

logger = logging.getLogger(__name__)

Sender = Callable[[messaging.Message], str]


def init_firebase(service_account_path: str, app_name: Optional[str] = None) -> firebase_admin.App:
    """Initialise a Firebase app from a service-account JSON file.

    Uses the default app name unless ``app_name`` is given. Raises CredentialsError
    when the file is missing or not a service-account key.
    """
    try:
        cred = credentials.Certificate(service_account_path)
    except (OSError, ValueError) as e:
        raise CredentialsError(service_account_path, str(e)) from e
    kwargs = {"name": app_name} if app_name else {}
    try:
        app = firebase_admin.initialize_app(cred, **kwargs)
    except ValueError as e:
        # App with this name already exists
        raise CredentialsError(service_account_path, str(e)) from e
    project_id = read_project_id(service_account_path) or cred.project_id
    logger.info("Firebase project: %s and FCM client initialised", project_id)
    return app


def close_firebase(app: Optional[firebase_admin.App]) -> None:
    if app is None:
        return
    try:
        firebase_admin.delete_app(app)
    except ValueError as e:
        logger.warning("Firebase app already deleted: %s", e)


def make_sender(app: firebase_admin.App, dry_run: bool = False) -> Sender:
    """Bind messaging.send to ``app``. Returns the FCM message id."""

    def send(message: messaging.Message) -> str:
        return messaging.send(message, dry_run=dry_run, app=app)

    return send
