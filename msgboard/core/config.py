"""
Application configuration using 12-factor environment variables.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Application
    app_name: str = Field(default="Message Board Service")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    
    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    
    # Database (in-memory SQLite by default)
    database_url: str = Field(default="sqlite://")
    seed_sample_data: bool = Field(default=True)
    
    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text
    
    # Statistics reporter
    stats_enabled: bool = Field(default=True)
    stats_interval_seconds: float = Field(default=60.0, gt=0, description="Delay between the end of one run and the start of the next")
    stats_recent_days: int = Field(default=7, ge=0)
    
    @property
    def is_in_memory_database(self) -> bool:
        """Check if the database lives only in this process."""
        return self.database_url in ("sqlite://", "sqlite:///:memory:")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
