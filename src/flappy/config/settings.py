"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseSettings):
    """Window and canvas settings."""

    # Logical canvas
    width: int = 900
    height: int = 600

    # Score strip rendered below the canvas
    score_strip_height: int = 40

    # Rendering
    fps: int = 60
    title: str = "Flappy"
    fullscreen: bool = False


class GameSettings(BaseSettings):
    """Gameplay tuning. Units are canvas pixels and milliseconds."""

    # Physics
    gravity: float = 1000.0
    flap_velocity: float = -350.0

    # Obstacles
    pipe_gap: int = 120
    pipe_speed: float = -200.0
    spawn_interval: float = 1500.0
    gap_min: int = 100
    gap_max: int = 500
    spawn_x: float = 960.0
    cull_x: float = -50.0

    # Player
    player_start_x: float = 80.0
    player_start_y: float = 300.0
    player_scale: float = 0.5
    angle_divisor: float = 10.0
    angle_min: float = -30.0
    angle_max: float = 90.0

    # Scenery
    road_x: float = 450.0
    road_y: float = 590.0
    background_scroll: float = 0.5


class AssetSettings(BaseSettings):
    """Sprite sources and placeholder sizes used when a file is missing."""

    background: str = "background.png"
    pipe: str = "column.png"
    road: str = "road.png"
    bird: str = "bird.png"

    bird_frame_width: int = 64
    bird_frame_height: int = 96

    pipe_size: tuple[int, int] = (64, 400)
    road_size: tuple[int, int] = (900, 40)

    # Custom display font, falls back to system families
    font_file: str = "fonts/flappy.ttf"
    font_fallbacks: list[str] = Field(default=["Arial", "DejaVu Sans", "sans-serif"])


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAPPY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Paths
    assets_path: Path = Field(default_factory=lambda: Path(__file__).parent.parent / "assets")

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    game: GameSettings = Field(default_factory=GameSettings)
    assets: AssetSettings = Field(default_factory=AssetSettings)

    @property
    def canvas_size(self) -> tuple[int, int]:
        """Logical canvas size."""
        return (self.display.width, self.display.height)

    def asset(self, name: str) -> Path:
        """Resolve an asset file name against the assets directory."""
        return self.assets_path / name


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
