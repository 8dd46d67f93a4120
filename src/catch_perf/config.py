"""Configuration management for Catch Perf."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CATCH_PERF_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Strain accumulation
    section_length: float = Field(
        default=750.0,
        gt=0,
        description="Length of a strain section in milliseconds",
    )
    decay_weight: float = Field(
        default=0.94,
        gt=0,
        le=1,
        description="Weight multiplier applied between consecutive sorted section peaks",
    )
    strain_decay_base: float = Field(
        default=0.2,
        gt=0,
        le=1,
        description="Fraction of strain retained after one second",
    )
    skill_multiplier: float = Field(
        default=900.0,
        gt=0,
        description="Scale applied to every strain increment",
    )

    # Output
    output_format: str = Field(
        default="text",
        description="CLI output format (text, json)",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**overrides: object) -> Settings:
    """Configure settings with overrides. Useful for testing."""
    global _settings
    _settings = Settings(**overrides)  # type: ignore[arg-type]
    return _settings
