"""Configuration for the game."""

from .settings import Settings, DisplaySettings, GameSettings, AssetSettings, get_settings

__all__ = ["Settings", "DisplaySettings", "GameSettings", "AssetSettings", "get_settings"]
