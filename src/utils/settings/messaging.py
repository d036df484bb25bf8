"""Forum private message settings configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class MessagingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    FORUM_BASE_URL: str = "http://localhost:3000"
    FORUM_API_KEY: str = ""
    SYSTEM_USERNAME: str = "system"
    REQUEST_TIMEOUT: int = 10
