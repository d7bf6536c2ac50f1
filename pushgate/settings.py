"""Application settings and configuration."""
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from pushgate import __version__
from pushgate.config_store import ConfigStore


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "pushgate"
    app_version: str = __version__
    debug: bool = False
    log_level: str = "INFO"

    # Firebase service account: path to the JSON key, or the key itself (raw or base64)
    service_account_path: str = "config/serviceAccount.json"
    service_account_json: str = ""
    # Validate messages with FCM without delivering them
    dry_run: bool = False

    # HTTP
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    cors_origins: list[str] = ["*"]

    # gRPC
    grpc_enabled: bool = True
    grpc_host: str = "[::]"
    grpc_port: int = 50051

    # Fan-out: max concurrent vendor calls per multicast/bulk request (0 = one task per message)
    send_max_concurrency: int = 0


# Config file path: CONFIG_FILE env or default config.yaml next to the package (file is master over env)
_config_file = os.environ.get("CONFIG_FILE") or str(
    Path(__file__).resolve().parent.parent / "config.yaml"
)
_config_store = ConfigStore(Settings, _config_file)


class _SettingsProxy:
    """Proxy so 'settings.attr' always returns current value from config store (sees CLI overrides)."""

    def __getattr__(self, name: str):
        return getattr(_config_store.get_settings(), name)


settings: Settings = _SettingsProxy()  # type: ignore[assignment]


def get_settings() -> Settings:
    """Return current Settings snapshot."""
    return _config_store.get_settings()


def get_config_store() -> ConfigStore:
    """Return the config store the CLI pushes its overrides into."""
    return _config_store
