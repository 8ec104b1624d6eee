from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote

from dotenv import load_dotenv


load_dotenv()


def _csv_env(name: str, default: str = "") -> list[str]:
    value = os.getenv(name, default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    app_name: str = os.getenv("APP_NAME", "CareerForge AI")
    environment: str = os.getenv("ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./db/careerforge.db")
    cors_origins: list[str] = field(
        default_factory=lambda: _csv_env("CORS_ORIGINS", "http://localhost:5000,http://localhost:5173")
    )

    supabase_url: str = os.getenv("SUPABASE_URL") or os.getenv("VITE_SUPABASE_URL", "")
    supabase_service_role_key: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    auth_timeout_seconds: float = float(os.getenv("AUTH_TIMEOUT_SECONDS", "10"))

    openai_api_key: str = os.getenv("OPENAI_API_KEY", "")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    stripe_secret_key: str = os.getenv("STRIPE_SECRET_KEY", "")
    paypal_client_id: str = os.getenv("PAYPAL_CLIENT_ID", "")
    paypal_client_secret: str = os.getenv("PAYPAL_CLIENT_SECRET", "")
    paypal_api_base: str = os.getenv("PAYPAL_API_BASE", "https://api-m.sandbox.paypal.com")
    export_price_cents: int = int(os.getenv("EXPORT_PRICE_CENTS", "499"))
    export_currency: str = os.getenv("EXPORT_CURRENCY", "usd")

    job_fetch_timeout_seconds: float = float(os.getenv("JOB_FETCH_TIMEOUT_SECONDS", "15"))
    job_page_max_chars: int = int(os.getenv("JOB_PAGE_MAX_CHARS", "15000"))

    @property
    def auth_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    def ensure_directories(self) -> None:
        if not self.database_url.startswith("sqlite:///"):
            return
        raw_path = self.database_url.replace("sqlite:///", "", 1)
        if not raw_path or raw_path == ":memory:":
            return
        db_path = Path(unquote(raw_path))
        if not db_path.is_absolute():
            db_path = Path(".") / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
