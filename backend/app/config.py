from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # MONGODB_URI is accepted for compatibility with existing deployments
    DATABASE_URL: Optional[str] = Field(
        None, validation_alias=AliasChoices("DATABASE_URL", "MONGODB_URI")
    )
    APP_HOST: str = "0.0.0.0"
    PORT: int = 5000
    ENVIRONMENT: str = Field(
        "development", validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV")
    )
    HOST: Optional[str] = None
    FRONTEND_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    STORE_PING_SECONDS: int = 30

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def docs_server_url(self) -> str:
        """Base URL advertised in the generated API documentation."""
        if self.is_production and self.HOST:
            return f"https://{self.HOST}"
        return f"http://localhost:{self.PORT}"


settings = Settings()
