from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required by seed script (bypasses RLS)
    seed_admin_email: Optional[str] = None  # Profile promoted to admin by the seed script

    # App
    app_name: str = "glutton4gainz-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    # Gamification / social
    leaderboard_limit: int = 50
    message_poll_interval_seconds: int = 5
    buddy_inactive_hours: int = 24
    mission_backdate_days: int = 7  # How far back a mission may be logged

    # Auth
    auth_cache_ttl_seconds: int = 60
    auth_cache_max_size: int = 500

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
