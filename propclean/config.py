"""
Configuration for propclean.

Settings cover where the neighborhood reference table lives and how logging
is emitted. Values come from environment variables or a .env file found by
searching upward from the caller.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def find_dotenv() -> str | None:
    """
    Search upward from calling file to find .env file.

    Searches up the directory tree from the location where this function
    is called, looking for a .env file.

    Returns:
        Path to .env file if found, None otherwise.
    """
    import inspect
    frame = inspect.currentframe()
    if frame and frame.f_back:
        caller_file = frame.f_back.f_globals.get('__file__')
        if caller_file:
            current = Path(caller_file).resolve().parent
        else:
            current = Path.cwd()
    else:
        current = Path.cwd()

    # Search up directory tree (max 5 levels to reach repo root)
    for _ in range(5):
        env_file = current / ".env"
        if env_file.exists():
            return str(env_file)
        current = current.parent

    return None


class Settings(BaseSettings):
    """
    propclean configuration.

    Configuration priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values

    Example:
        ```bash
        export DATA_DIR=/srv/reference
        export NEIGHBORHOOD_FILE=bos_neighborhoods.csv
        export LOG_LEVEL=DEBUG
        ```
    """

    model_config = SettingsConfigDict(
        env_file=find_dotenv(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Reference Data ===
    DATA_DIR: str = Field(
        "data",
        description="Directory holding reference tables"
    )
    NEIGHBORHOOD_FILE: str = Field(
        "bos_neighborhoods.csv",
        description="CSV of neighborhood names, relative to DATA_DIR"
    )
    NEIGHBORHOOD_NAME_COLUMN: str = Field(
        "Name",
        description="Column holding the neighborhood name"
    )
    NEIGHBORHOOD_CITY_COLUMN: Optional[str] = Field(
        None,
        description="Column holding the parent city; DEFAULT_PARENT_CITY when unset"
    )
    DEFAULT_PARENT_CITY: str = Field(
        "BOSTON",
        description="Parent city for neighborhoods without a city column"
    )
    ENCODING_SAMPLE_SIZE: int = Field(
        500000,
        description="Bytes sampled for reference file encoding detection",
        ge=1,
        le=10_000_000
    )

    # === Logging ===
    LOG_LEVEL: str = Field(
        "INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_FORMAT: Literal["text", "json"] = Field(
        "text",
        description="Log format (json or text)"
    )

    @property
    def neighborhood_path(self) -> Path:
        """Full path of the neighborhood reference table."""
        return Path(self.DATA_DIR) / self.NEIGHBORHOOD_FILE


# Global settings instance
settings = Settings()


__all__ = ["Settings", "settings", "find_dotenv"]
