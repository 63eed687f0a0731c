"""Application configuration settings."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from roombill.models.enums import SharePolicyName


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "Roombill"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Session cookie signing
    SECRET_KEY: str = "your-secret-key-change-this-in-production"

    # Remote billing API that owns rooms, readings and laundry events
    API_BASE_URL: str = "http://localhost:8080"
    API_TIMEOUT_SECONDS: float = 10.0

    # Where the monthly split is computed: in-process engine or remote endpoint
    ALLOCATION_BACKEND: Literal["local", "remote"] = "local"
    SHARE_POLICY: SharePolicyName = SharePolicyName.EQUAL

    @property
    def google_auth_url(self) -> str:
        """Remote URL that starts the Drive upload OAuth flow."""
        return f"{self.API_BASE_URL.rstrip('/')}/auth/google"


settings = Settings()
