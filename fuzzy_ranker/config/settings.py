"""Library settings and configuration management."""

from functools import lru_cache

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Default search and logging settings with environment variable support."""
    
    # Search defaults
    location: int = Field(default=0, ge=0)
    distance: int = Field(default=100, ge=0)
    threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    max_pattern_length: int = Field(default=32, ge=1)  # machine word size
    min_match_char_length: int = Field(default=1, ge=1)
    case_sensitive: bool = Field(default=False)
    
    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    
    model_config = ConfigDict(
        env_prefix="FUZZY_RANKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached library settings."""
    return Settings()
