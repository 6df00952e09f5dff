"""Configuration models for the launcher.

Loaded from ~/.config/aura-launcher/config.json. Every field has a
default so a missing file or a partial document is valid.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LauncherSection(BaseModel):
    """Result list settings."""

    max_results: int = Field(default=10, ge=1, description="Maximum number of ranked results")
    min_score: float = Field(default=0.0, ge=0.0, description="Minimum fuzzy score to keep a match")


class AppearanceSection(BaseModel):
    """Icon resolution settings."""

    icon_theme: Optional[str] = Field(default=None, description="Icon theme name (None = system default)")
    icon_size: int = Field(default=48, ge=1, description="Icon size in pixels")
    icon_cache_capacity: int = Field(default=200, ge=1, description="Maximum cached icon lookups")

    @field_validator("icon_theme")
    @classmethod
    def blank_theme_is_default(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty theme name as the system default."""
        if v is not None and not v.strip():
            return None
        return v


class LauncherConfig(BaseModel):
    """Top-level launcher configuration."""

    launcher: LauncherSection = Field(default_factory=LauncherSection)
    appearance: AppearanceSection = Field(default_factory=AppearanceSection)
