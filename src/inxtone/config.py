"""Inxtone Configuration Module.

Provides centralized configuration for all Inxtone components.
All settings support environment variable overrides with INXTONE_ prefix.

Usage:
    from inxtone.config import settings

    # Access context budget settings
    print(settings.context.total_budget)
"""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default paths
INXTONE_HOME = Path.home() / ".inxtone"
INXTONE_DB = INXTONE_HOME / "story.db"


class ContextSettings(BaseModel):
    """Settings for context assembly and token budgeting."""

    total_budget: int = Field(
        default=1_000_000,
        description="Total model context window in estimated tokens",
    )
    output_reserve: int = Field(
        default=4_000,
        description="Tokens reserved for the model's output",
    )
    prompt_reserve: int = Field(
        default=2_000,
        description="Tokens reserved for the prompt template and instructions",
    )
    prev_chapter_tail_length: int = Field(
        default=500,
        description="Characters of the preceding chapter carried for continuity",
    )

    # Priority tiers (higher is admitted first)
    content_priority: int = Field(
        default=1000,
        description="Priority of current chapter content and previous-chapter tail",
    )
    outline_priority: int = Field(
        default=800,
        description="Priority of chapter outline and arc summary",
    )
    character_priority: int = Field(
        default=600,
        description="Priority of character profiles and scoped relationships",
    )
    world_priority: int = Field(
        default=400,
        description="Priority of locations, power system and social rules",
    )
    plot_priority: int = Field(
        default=200,
        description="Priority of foreshadowing and hooks",
    )
    custom_priority: int = Field(
        default=200,
        description="Default priority for caller-supplied context items",
    )


class InxtoneSettings(BaseSettings):
    """Inxtone configuration.

    All settings can be overridden via environment variables with INXTONE_ prefix.
    For example, INXTONE_CONTEXT__TOTAL_BUDGET=200000 shrinks the budget.
    """

    model_config = SettingsConfigDict(
        env_prefix="INXTONE_",
        env_nested_delimiter="__",
    )

    # Paths
    home: Path = Field(
        default=INXTONE_HOME,
        description="Base directory for Inxtone data storage",
    )
    db_path: Path = Field(
        default=INXTONE_DB,
        description="Path to SQLite Story Bible database",
    )

    log_level: str = Field(
        default="warning",
        description="Logging level (debug, info, warning, error)",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console or json)",
    )

    # Nested settings
    context: ContextSettings = Field(default_factory=ContextSettings)


# Module-level singleton
settings = InxtoneSettings()
