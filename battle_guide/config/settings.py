# ABOUTME: Configuration settings for the battle guide using Pydantic Settings.
# ABOUTME: Loads mission file paths, web server options and logging options from the environment.

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    # Mission data
    primary_missions_path: str = Field(
        default="data/primary_missions.txt",
        description="Text file with primary mission cards"
    )
    secondary_missions_path: str = Field(
        default="data/secondary_missions.txt",
        description="Text file with secondary mission cards"
    )

    # Web server
    web_host: str = Field(
        default="0.0.0.0",
        description="Interface the web guide binds to"
    )
    web_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the web guide"
    )
    session_cookie_name: str = Field(
        default="GAME_SESSION",
        description="Cookie holding the browser's session id"
    )
    session_cookie_max_age: int = Field(
        default=60 * 60 * 24,
        description="Session cookie lifetime in seconds"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for rotating log files (default: logs/)"
    )
    log_to_file: bool = Field(
        default=False,
        description="Also write logs to rotating files"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Singleton settings instance - lazy so tests can construct their own
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the singleton settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
