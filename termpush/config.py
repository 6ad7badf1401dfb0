from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "termpush"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # JSON or YAML catalog with projects, members, locales and terms
    CATALOG_PATH: str = "catalog.yml"

    # Bearer token -> caller identity
    API_TOKENS: dict[str, str] = Field(default_factory=dict)

    PUSH_MAX_WORKERS: int = 4

    SINK: Literal["none", "s3", "directory"] = "none"
    SINK_DIRECTORY: str = "pushed"

    S3_ENDPOINT_URL: str | None = None
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_REGION: str = "us-east-1"
    S3_BUCKET_NAME: str = "translations"
    S3_PUBLIC_URL: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def s3_public_base_url(self) -> str:
        """Base URL under which uploaded objects are reachable."""
        if self.S3_PUBLIC_URL:
            return self.S3_PUBLIC_URL.rstrip("/")
        if self.S3_ENDPOINT_URL:
            return self.S3_ENDPOINT_URL.rstrip("/")
        return f"https://s3.{self.S3_REGION}.amazonaws.com"


settings = Settings()
