"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COLUMN_IDS: dict[str, str] = {
    "author": "text4__1",
    "username": "text1__1",
    "url": "text__1",
    "date": "date__1",
    "repository": "text8__1",
    "loc": "text106__1",
}


class Settings(BaseSettings):
    """Application settings with environment variable loading and sensible defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "commit-relay"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # Source-control host (commit lookup)
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    user_agent: str = "Vercel-Webhook"

    # Work-tracking board
    monday_api_token: str = ""
    monday_api_url: str = "https://api.monday.com/v2"
    monday_board_id: str = ""
    monday_column_ids: dict[str, str] = DEFAULT_COLUMN_IDS

    bot_username: str = "Devtools"
    http_timeout: float = 30.0


settings = Settings()
