"""
Firebase service-account resolution.

The gateway needs a service-account JSON file on disk. On PaaS hosts that cannot
mount a key file, put the **entire JSON content** (raw or base64-encoded) in
SERVICE_ACCOUNT_JSON instead; it is written to a temp file at startup and that
path is used in place of SERVICE_ACCOUNT_PATH.
"""
import base64
import binascii
import json
import logging
import os
import tempfile
from typing import Any, Optional

logger = logging.getLogger(__name__)


def _decode(raw: str) -> Any:
    """Support both raw JSON and base64-encoded JSON (for env vars with newlines)."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        decoded = base64.b64decode(raw, validate=True).decode("utf-8")
        return json.loads(decoded)


def materialize_service_account(raw: str) -> Optional[str]:
    """Write inline service-account JSON to a temp file and return its path. None when unusable."""
    if not raw or not raw.strip():
        return None
    raw = raw.strip()
    logger.info("Inline service account present (%d chars), writing temp file", len(raw))
    try:
        data = _decode(raw)
    except (json.JSONDecodeError, binascii.Error, UnicodeDecodeError) as e:
        logger.warning("Inline service account is neither JSON nor base64 JSON: %s", e)
        return None
    if not isinstance(data, dict):
        logger.warning("Inline service account is not a JSON object; ignoring")
        return None
    fd, path = tempfile.mkstemp(suffix=".json", prefix="pushgate-sa-")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f)
    except OSError:
        os.unlink(path)
        raise
    return path


def resolve_service_account_path(path: str, inline_json: str = "") -> str:
    """Inline JSON wins over the configured path when it decodes to an object."""
    materialized = materialize_service_account(inline_json)
    if materialized:
        return materialized
    return path


def inline_project_id(raw: str) -> Optional[str]:
    """Return ``project_id`` from inline service-account JSON without touching disk."""
    try:
        data = _decode(raw.strip())
    except (json.JSONDecodeError, binascii.Error, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return data.get("project_id")


def read_project_id(path: str) -> Optional[str]:
    """Return ``project_id`` from a service-account file, or None if unreadable."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not read project_id from %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    return data.get("project_id")
