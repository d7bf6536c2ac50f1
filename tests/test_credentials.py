"""Service-account resolution from a path or inline JSON."""
import base64
import json
import os

from pushgate.credentials import (
    inline_project_id,
    materialize_service_account,
    read_project_id,
    resolve_service_account_path,
)

SERVICE_ACCOUNT = {"type": "service_account", "project_id": "demo-project", "client_email": "x@demo"}


def test_materialize_raw_json():
    path = materialize_service_account(json.dumps(SERVICE_ACCOUNT))
    try:
        assert read_project_id(path) == "demo-project"
    finally:
        os.unlink(path)


def test_materialize_base64_json():
    raw = base64.b64encode(json.dumps(SERVICE_ACCOUNT).encode()).decode()
    path = materialize_service_account(raw)
    try:
        with open(path, encoding="utf-8") as f:
            assert json.load(f) == SERVICE_ACCOUNT
    finally:
        os.unlink(path)


def test_materialize_rejects_garbage():
    assert materialize_service_account("") is None
    assert materialize_service_account("   ") is None
    assert materialize_service_account("not json at all!") is None
    assert materialize_service_account("[1, 2]") is None


def test_resolve_prefers_inline_json():
    path = resolve_service_account_path("config/serviceAccount.json", json.dumps(SERVICE_ACCOUNT))
    try:
        assert path != "config/serviceAccount.json"
        assert read_project_id(path) == "demo-project"
    finally:
        os.unlink(path)


def test_resolve_falls_back_to_path():
    assert resolve_service_account_path("config/serviceAccount.json", "") == "config/serviceAccount.json"


def test_read_project_id_missing_file(tmp_path):
    assert read_project_id(str(tmp_path / "nope.json")) is None


def test_inline_project_id():
    assert inline_project_id(json.dumps(SERVICE_ACCOUNT)) == "demo-project"
    assert inline_project_id("garbage") is None
