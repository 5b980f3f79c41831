"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str

    # Redis (form rate limiting)
    redis_url: str = "redis://localhost:6379/0"
    redis_timeout_seconds: float = 2.0

    # App
    log_level: str = "INFO"
    environment: str = "production"
    site_name: str = "Nexus Plater"

    # IANA zone for the same-day duplicate check, e.g. "Asia/Dubai".
    # Empty means the server's local zone.
    timezone: str = ""

    # Form submissions per client IP
    form_rate_limit_max: int = 5
    form_rate_limit_window_seconds: int = 900  # 15 minutes

    # Letters-and-spaces rule for names (Latin + Arabic)
    inquiry_name_charset_check: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings()  # type: ignore[call-arg]
