"""Application configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"


def _section_config(prefix: str) -> SettingsConfigDict:
    # Each section reads .env on its own when built by a default factory
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class MediaSettings(BaseSettings):
    """Video file and camera acquisition settings."""

    model_config = _section_config("MEDIA_")

    # Most containers do not report a usable frame rate
    default_file_fps: float = Field(default=60.0, ge=1.0, le=1000.0)
    camera_index: int = 0
    camera_fps: float = Field(default=60.0, ge=1.0, le=1000.0)
    camera_min_fps: float = 30.0
    camera_width: int = 1920
    camera_height: int = 1080
    frame_rate_presets: list[float] = Field(default_factory=lambda: [30.0, 60.0, 120.0, 240.0])


class ReportSettings(BaseSettings):
    """Report generation settings."""

    model_config = _section_config("REPORT_")

    category: str = "male"


class StorageSettings(BaseSettings):
    """Result handoff and share export locations."""

    model_config = _section_config("STORAGE_")

    results_path: str = "data/jump_results.json"
    share_export_path: str = "data/jump_summary.txt"


class UISettings(BaseSettings):
    """Display and overlay settings."""

    model_config = _section_config("")

    display_width: int = Field(default=1280, alias="DISPLAY_WIDTH")
    display_height: int = Field(default=720, alias="DISPLAY_HEIGHT")
    show_preview: bool = Field(default=True, alias="SHOW_PREVIEW")
    show_help: bool = Field(default=True, alias="SHOW_HELP")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = _section_config("LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    media: MediaSettings = Field(default_factory=MediaSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
