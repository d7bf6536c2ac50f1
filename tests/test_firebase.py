"""Firebase client lifecycle with the SDK patched out."""
import json
from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import messaging

from pushgate.domain.common.errors import CredentialsError
from pushgate.infra.push import firebase


def test_init_missing_file(tmp_path):
    with pytest.raises(CredentialsError) as exc:
        firebase.init_firebase(str(tmp_path / "missing.json"))
    assert exc.value.path.endswith("missing.json")


def test_init_invalid_service_account(tmp_path):
    path = tmp_path / "sa.json"
    path.write_text(json.dumps({"type": "authorized_user"}))
    with pytest.raises(CredentialsError):
        firebase.init_firebase(str(path))


def test_init_success_logs_project(tmp_path, caplog):
    path = tmp_path / "sa.json"
    path.write_text(json.dumps({"type": "service_account", "project_id": "demo-project"}))
    fake_app = MagicMock()
    with patch.object(firebase.credentials, "Certificate") as cert, \
            patch.object(firebase.firebase_admin, "initialize_app", return_value=fake_app) as init:
        caplog.set_level("INFO")
        app = firebase.init_firebase(str(path), app_name="test-app")
    assert app is fake_app
    cert.assert_called_once_with(str(path))
    init.assert_called_once_with(cert.return_value, name="test-app")
    assert "demo-project" in caplog.text


def test_init_duplicate_app(tmp_path):
    path = tmp_path / "sa.json"
    path.write_text(json.dumps({"type": "service_account", "project_id": "demo-project"}))
    with patch.object(firebase.credentials, "Certificate"), \
            patch.object(firebase.firebase_admin, "initialize_app", side_effect=ValueError("already exists")):
        with pytest.raises(CredentialsError):
            firebase.init_firebase(str(path))


def test_sender_binds_app_and_dry_run():
    app = MagicMock()
    message = messaging.Message(token="t")
    with patch.object(firebase.messaging, "send", return_value="projects/p/messages/1") as send:
        result = firebase.make_sender(app, dry_run=True)(message)
    assert result == "projects/p/messages/1"
    send.assert_called_once_with(message, dry_run=True, app=app)


def test_close_tolerates_none_and_deleted_app():
    firebase.close_firebase(None)
    with patch.object(firebase.firebase_admin, "delete_app", side_effect=ValueError("gone")):
        firebase.close_firebase(MagicMock())
