from typing import Literal

from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "querytpl"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SENTRY_DSN: HttpUrl | None = None

    # Identifier quote for ?# (MySQL: backtick; ANSI: double quote)
    SQL_IDENTIFIER_QUOTE: str = "`"

    # Optional MySQL server; when set, escaping follows the connection charset.
    MYSQL_HOST: str | None = None
    MYSQL_PORT: int = 3306
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_DATABASE: str | None = None
    MYSQL_CONNECT_TIMEOUT: int = 10


settings = Settings()  # type: ignore
