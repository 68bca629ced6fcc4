"""
Glyph and style configuration.

Loads ``config.toml`` with sections:
- [icons]: application id -> glyph (merged over the built-in table)
- [glyphs]: glyphs for empty workspaces and unknown applications
- [layout]: glyph per layout category
- [layout_style] / [icon_style]: Pango span attributes per category
- [title]: title style and truncation

Every key is optional; absent keys keep their built-in default.
"""

import logging
import os
import tomllib
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)


# Enumerations

class LayoutCategory(str, Enum):
    """Layout glyph categories, one per shape the resolver can report."""
    SINGLE = "single"
    FLOATING = "floating"
    FLOATING_PEERS = "floating_peers"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    MANY_VERTICAL = "many_vertical"
    BAR_FOCUSED = "bar_focused"
    BAR_UNFOCUSED = "bar_unfocused"


class IconCategory(str, Enum):
    """Application glyph categories."""
    APP = "app"
    EMPTY = "empty"
    UNKNOWN = "unknown"


# Nerd Font code points
DEFAULT_APP_ICONS: Dict[str, str] = {
    "firefox": "",
    "neovide": "",
    "Code": "",
    "Chromium": "",
    "gthumb": "",
    "swappy": "",
    "org.twosheds.iwgtk": "直",
    "org.gnome.Weather": "",
    "org.kde.krusader": "",
    "albert": "",
    "gnome_system_monitor": "",
}


# Configuration sections

class IconGlyphs(BaseModel):
    """Glyphs used when no application icon applies."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    empty: str = Field("+", description="Workspace without an identifiable window")
    unknown: str = Field("?", description="Window whose application has no icon")


class LayoutGlyphs(BaseModel):
    """Glyph per layout category."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    single: str = "□"
    floating: str = "▪"
    floating_peers: str = "▣"
    left: str = "◧"
    right: str = "◨"
    top: str = "⬒"
    bottom: str = "⬓"
    many_vertical: str = "☰"
    bar_focused: str = "▮"
    bar_unfocused: str = "▯"

    def glyph(self, category: LayoutCategory) -> str:
        return getattr(self, category.value)


class LayoutStyle(BaseModel):
    """Pango attributes per layout category; ``default`` fills the gaps."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default: str = 'font_size="small"'
    single: Optional[str] = None
    floating: Optional[str] = None
    floating_peers: Optional[str] = None
    left: Optional[str] = None
    right: Optional[str] = None
    top: Optional[str] = None
    bottom: Optional[str] = None
    many_vertical: Optional[str] = None
    bar_focused: Optional[str] = None
    bar_unfocused: Optional[str] = 'font_size="small" alpha="60%"'

    def attributes(self, category: LayoutCategory) -> str:
        value = getattr(self, category.value)
        return self.default if value is None else value


class IconStyle(BaseModel):
    """Pango attributes per icon category; ``default`` fills the gaps."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default: str = ""
    app: Optional[str] = None
    empty: Optional[str] = None
    unknown: Optional[str] = None

    def attributes(self, category: IconCategory) -> str:
        value = getattr(self, category.value)
        return self.default if value is None else value


class TitleConfig(BaseModel):
    """Window title rendering."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    style: str = Field('font_size="small"', description="Pango attributes for the title")
    max_length: int = Field(24, ge=0, description="Characters kept; 0 hides the title")


class LabelConfig(BaseModel):
    """Complete labeler configuration, resolved once and shared by every cycle."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    icons: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_APP_ICONS))
    glyphs: IconGlyphs = Field(default_factory=IconGlyphs)
    layout: LayoutGlyphs = Field(default_factory=LayoutGlyphs)
    layout_style: LayoutStyle = Field(default_factory=LayoutStyle)
    icon_style: IconStyle = Field(default_factory=IconStyle)
    title: TitleConfig = Field(default_factory=TitleConfig)

    @field_validator("icons", mode="before")
    @classmethod
    def merge_default_icons(cls, v: Dict[str, str]) -> Dict[str, str]:
        """User icons extend and override the built-in table."""
        if v is None:
            return dict(DEFAULT_APP_ICONS)
        if not isinstance(v, dict):
            # Let pydantic report the type error
            return v
        return {**DEFAULT_APP_ICONS, **v}

    def app_icon(self, identifier: str) -> Optional[str]:
        return self.icons.get(identifier)


DEFAULT_CONFIG = LabelConfig()


def default_config_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/sway-workspace-labels/config.toml``."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "sway-workspace-labels" / "config.toml"


class ConfigLoader:
    """Loads LabelConfig from a TOML file."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: TOML file (defaults to the XDG location)
        """
        self.config_path = config_path or default_config_path()

    def load(self) -> LabelConfig:
        """
        Load configuration, falling back to defaults when the file is absent.

        Returns:
            LabelConfig with user overrides applied

        Raises:
            ConfigLoadError: If the file is unreadable, not TOML, or has unknown keys
        """
        if not self.config_path.exists():
            logger.debug(f"No configuration at {self.config_path}, using defaults")
            return LabelConfig()

        try:
            with open(self.config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigLoadError(str(self.config_path), str(e)) from e

        try:
            config = LabelConfig(**data)
        except ValidationError as e:
            raise ConfigLoadError(str(self.config_path), str(e)) from e

        logger.info(
            f"Loaded configuration from {self.config_path} "
            f"({len(config.icons)} application icons)"
        )
        return config
