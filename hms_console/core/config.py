from dataclasses import dataclass
from pathlib import Path
import os


PACKAGE_DIR = Path(__file__).resolve().parents[1]


def _optional_path(env_name: str) -> Path | None:
    raw = os.getenv(env_name, "").strip()
    return Path(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    app_name: str = "Hotel Operations Console"
    secret_key: str = os.getenv("HMS_CONSOLE_SECRET_KEY", "change-me-for-production")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))
    login_url: str = os.getenv("HMS_LOGIN_URL", "/login")
    session_cookie_name: str = os.getenv("HMS_SESSION_COOKIE", "access_token")
    loading_refresh_seconds: int = int(os.getenv("HMS_LOADING_REFRESH_SECONDS", "2"))
    data_dir: Path = Path(os.getenv("HMS_DATA_DIR", str(PACKAGE_DIR.parent / "data")))
    permissions_path: Path | None = _optional_path("HMS_PERMISSIONS_PATH")
    navigation_path: Path = _optional_path("HMS_NAVIGATION_PATH") or PACKAGE_DIR / "data" / "navigation.json"
    audit_log_path: Path = _optional_path("HMS_AUDIT_LOG_PATH") or data_dir / "access_events.jsonl"
    audit_retention_days: int = int(os.getenv("HMS_AUDIT_RETENTION_DAYS", "90"))
    log_path: Path = _optional_path("HMS_LOG_PATH") or data_dir / "console.log"
    log_level: str = os.getenv("HMS_LOG_LEVEL", "INFO").upper()


settings = Settings()
settings.data_dir.mkdir(parents=True, exist_ok=True)
