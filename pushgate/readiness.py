"""Readiness checks: config, packages, service-account credentials."""
import importlib
import logging
import os

from pushgate.credentials import inline_project_id, read_project_id

logger = logging.getLogger(__name__)

# Result: (passed: bool, message: str)
CheckResult = tuple[bool, str]
ChecksDict = dict[str, CheckResult]

REQUIRED_PACKAGES = ("fastapi", "uvicorn", "firebase_admin", "grpc", "grpc_tools")


def check_config() -> CheckResult:
    """Load settings and read the keys the gateway cannot start without."""
    try:
        from pushgate.settings import get_settings
        s = get_settings()
        _ = s.app_name
        _ = s.service_account_path
        _ = s.http_port
        return True, "ok"
    except Exception as e:
        return False, str(e)


def check_packages() -> CheckResult:
    """Import the vendor SDK and the server stack."""
    missing = []
    for name in REQUIRED_PACKAGES:
        try:
            importlib.import_module(name)
        except ImportError:
            missing.append(name)
    if missing:
        return False, f"missing: {', '.join(missing)}"
    return True, "ok"


def check_credentials() -> CheckResult:
    """Service-account file exists and names a Firebase project."""
    try:
        from pushgate.settings import get_settings
        s = get_settings()
    except Exception as e:
        return False, str(e)
    if s.service_account_json.strip():
        if inline_project_id(s.service_account_json):
            return True, "ok (inline)"
        return False, "inline service account has no project_id"
    path = s.service_account_path
    if not os.path.isfile(path):
        return False, f"service account not found: {path}"
    project_id = read_project_id(path)
    if not project_id:
        return False, f"no project_id in {path}"
    return True, "ok"


def check_push_service(app) -> CheckResult:
    """FCM client was initialised by the app lifespan."""
    if getattr(app.state, "push_service", None) is None:
        return False, "FCM client not initialised"
    return True, "ok"


def run_all_checks(app=None) -> ChecksDict:
    """Run all readiness checks. Returns dict of check_name -> (passed, message)."""
    checks = {
        "config": check_config(),
        "packages": check_packages(),
        "credentials": check_credentials(),
    }
    if app is not None:
        checks["push_service"] = check_push_service(app)
    return checks


def is_ready(checks: ChecksDict | None = None) -> tuple[bool, dict[str, str]]:
    """
    True if all required checks pass.
    Returns (ready: bool, checks_summary: dict of name -> "ok" | error message).
    """
    if checks is None:
        checks = run_all_checks()
    required = {"config", "packages", "push_service"}
    summary: dict[str, str] = {name: msg for name, (_, msg) in checks.items()}
    all_required = all(checks[n][0] for n in required if n in checks)
    return all_required, summary
