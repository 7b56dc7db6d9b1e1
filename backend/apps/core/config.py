"""
Configuration module using Pydantic Settings.
"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

load_dotenv()


class StorageConfig(BaseSettings):
    bucket_name: str | None = Field(default=None, alias="STORAGE_BUCKET_NAME")
    public_url_template: str = "https://storage.googleapis.com/{bucket}/{path}"
    output_prefix: str = "emojified/emojified-"


class VisionConfig(BaseSettings):
    max_results: int = 100


class Settings(BaseSettings):
    """Application-wide settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Paths
    EMOJIS_DIR: Path = Path(__file__).parent.parent / "emojify" / "emojis"

    # Draw a hat above faces wearing headwear, on top of the emotion emoji
    HAT_OVERLAY: bool = False

    LOG_LEVEL: str = "INFO"

    # Sub-configs
    storage: StorageConfig = Field(default_factory=StorageConfig)
    vision: VisionConfig = Field(default_factory=VisionConfig)

    def reload(self) -> None:
        """Reload settings from environment variables."""
        new_settings = Settings()
        self.__dict__.update(new_settings.__dict__)


settings = Settings()
