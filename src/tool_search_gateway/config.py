"""Configuration management for Tool Search Gateway"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

SearchProvider = Literal["lexical", "semantic", "claude", "codex"]


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Search
    search_provider: SearchProvider = "lexical"
    search_result_limit: int = 5

    # Static embeddings (semantic provider)
    embedding_model: str = "6B.50d"
    embedding_cache_dir: Path = Path.home() / ".cache" / "tool-search-gateway" / "glove"
    embedding_download_timeout: float | None = 300.0

    # External rankers (claude / codex providers)
    claude_model: str = "haiku"
    ranker_timeout: float | None = None

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8001

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def uses_external_ranker(self) -> bool:
        """Check if searches are delegated to an external ranker"""
        return self.search_provider in ("claude", "codex")


# Global settings instance
settings = Settings()


def get_config() -> Settings:
    """Get the global configuration instance."""
    return settings
