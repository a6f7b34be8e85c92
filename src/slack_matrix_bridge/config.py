from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    log_level: str = "INFO"

    relay_timeout_seconds: float = 20.0
    relay_user_agent: str = "Slack-Matrix-Bridge/1.0"
    default_username: str = "SlackBridge"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
