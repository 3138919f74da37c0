from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Rule engine settings loaded from .env file."""

    # ── Application ──────────────────────────────────────────────
    app_name: str = "Bookdesk Rule Engine"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # ── Database ─────────────────────────────────────────────────
    mongodb_atlas_uri: Optional[str] = None
    database_name: str = "bookdesk_db"

    # ── Business calendar ────────────────────────────────────────
    business_timezone: str = "Asia/Bangkok"
    currency_symbol: str = "฿"

    # ── Customer intelligence ────────────────────────────────────
    customer_notes_max_length: int = 5000
    vip_booking_threshold: int = 5
    vip_spend_threshold: float = 15000
    frequent_booker_threshold: int = 5
    high_value_spend_threshold: float = 15000
    inactive_risk_days: int = 120

    class Config:
        env_file = ".env.local"
        extra = "ignore"


# ── Module-level singleton ──────────────────────────────────────
settings = Settings()
