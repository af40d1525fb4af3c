"""Configuration management for skilldocs."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Lint settings, read from the environment and an optional .env file."""

    # Corpus layout
    skills_root: Path = Field(default=Path("."), alias="SKILLS_ROOT")
    skill_dirs: str | list[str] = Field(default=["skills"], alias="SKILL_DIRS")

    # Lint rules
    skill_max_lines: int = Field(default=500, alias="SKILL_MAX_LINES", gt=0)
    skill_strict: bool = Field(default=False, alias="SKILL_STRICT")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("skill_dirs", mode="before")
    @classmethod
    def split_skill_dirs(cls, value: str | list[str]) -> list[str]:
        """Accept SKILL_DIRS=skills,extra/skills as well as a JSON list."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        normalized = str(value).strip().upper()
        if normalized in LOG_LEVELS:
            return normalized
        raise ValueError(f"LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}")

    @property
    def skill_dir_list(self) -> list[str]:
        """skill_dirs as a list, whichever form it was given in."""
        if isinstance(self.skill_dirs, str):
            return [self.skill_dirs]
        return list(self.skill_dirs)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
