from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENVIRONMENT: str = "DEV"
    LOG_LEVEL: str = "INFO"
    API_VERSION: str = "1.4.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8010
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Mirrors the forum's plugin switch; when off every route is a 404
    FEEDBACK_ENABLED: bool = True
    FEEDBACK_PATH_PREFIX: str = "/deald-feedback"

    def validate_prod(self) -> None:
        """Refuse to start a production instance with unsafe defaults."""
        if self.ENVIRONMENT.upper() != "PROD":
            return
        if not self.CORS_ORIGINS:
            raise ValueError("CORS_ORIGINS must be set in production")
        if not self.FEEDBACK_PATH_PREFIX.startswith("/"):
            raise ValueError("FEEDBACK_PATH_PREFIX must start with '/'")
