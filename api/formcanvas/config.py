"""
Engine Configuration

Uses pydantic-settings for environment variable loading with validation.
All tunables of the canvas layout engine are centralized here.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables can be set directly or via .env file, e.g.
    FORMCANVAS_MAX_ROW_CHILDREN=6.
    """

    model_config = SettingsConfigDict(
        env_prefix="FORMCANVAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Runtime environment"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # ==========================================================================
    # Drop Classification
    # ==========================================================================
    drop_left_threshold: float = Field(
        default=0.35,
        ge=0.0,
        le=1.0,
        description="Pointer x fraction below which a drop is classified LEFT"
    )

    drop_right_threshold: float = Field(
        default=0.65,
        ge=0.0,
        le=1.0,
        description="Pointer x fraction above which a drop is classified RIGHT"
    )

    drop_vertical_split: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Pointer y fraction separating BEFORE from AFTER in the centre band"
    )

    # ==========================================================================
    # Tree Structure
    # ==========================================================================
    max_row_children: Annotated[int, Field(ge=2)] | None = Field(
        default=4,
        description="Maximum children per row container (None = unlimited)"
    )

    max_tree_depth: int = Field(
        default=64,
        ge=1,
        description="Depth bound for tree walks over untrusted input"
    )

    field_id_pattern: str = Field(
        default=r"^[A-Za-z0-9_]+$",
        description="Regular expression every fieldId must match"
    )

    # ==========================================================================
    # History
    # ==========================================================================
    history_limit: int = Field(
        default=50,
        ge=1,
        description="Snapshots kept by CanvasHistory before the oldest is evicted"
    )

    @model_validator(mode="after")
    def validate_thresholds(self):
        """Left threshold must not exceed the right one."""
        if self.drop_left_threshold > self.drop_right_threshold:
            raise ValueError("drop_left_threshold must be <= drop_right_threshold")
        return self

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @computed_field
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @computed_field
    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
