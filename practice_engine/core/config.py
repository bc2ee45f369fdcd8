"""
Practice engine configuration settings
FILE: practice_engine/core/config.py
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment variables"""

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Summary Configuration
    weakest_topics_limit: int = 3

    # Question Pool Configuration
    topics_cache_enabled: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "PRACTICE_"
        case_sensitive = False  # This allows case-insensitive matching
        extra = "allow"  # This allows extra fields


settings = Settings()
