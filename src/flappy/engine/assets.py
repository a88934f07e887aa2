"""
Texture loading for the scene.

Images are decoded with Pillow into RGBA numpy arrays and spritesheets are
sliced into frames. Missing or unreadable files are replaced with a
generated placeholder so the scene can always be built. pygame surfaces
are created lazily, the first time the renderer asks for a texture.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional
import logging

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError
import pygame

logger = logging.getLogger(__name__)

Frame = NDArray[np.uint8]
PlaceholderFactory = Callable[[int, int], Frame]


@dataclass
class Texture:
    """One or more equally sized RGBA frames under a key."""

    key: str
    frames: list[Frame]
    placeholder: bool = False
    _surfaces: dict[int, pygame.Surface] = field(default_factory=dict, repr=False)

    @property
    def width(self) -> int:
        return int(self.frames[0].shape[1])

    @property
    def height(self) -> int:
        return int(self.frames[0].shape[0])

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def surface(self, frame: int = 0) -> pygame.Surface:
        """Get (and cache) the pygame surface for a frame."""
        frame = frame % self.frame_count
        if frame not in self._surfaces:
            data = np.ascontiguousarray(self.frames[frame])
            self._surfaces[frame] = pygame.image.frombuffer(
                data.tobytes(), (self.width, self.height), "RGBA"
            ).copy()
        return self._surfaces[frame]


def _read_rgba(path: Path) -> Optional[Frame]:
    """Decode an image file to an RGBA array, or None if unavailable."""
    if not path.exists():
        logger.warning(f"Asset not found: {path}")
        return None
    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Failed to decode asset {path}: {e}")
        return None


class AssetRegistry:
    """Keyed store of textures loaded during preload."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = Path(base_path)
        self._textures: dict[str, Texture] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._textures

    def get(self, key: str) -> Texture:
        return self._textures[key]

    @property
    def keys(self) -> list[str]:
        return list(self._textures)

    def load_image(
        self,
        key: str,
        filename: str,
        size: tuple[int, int],
        placeholder: PlaceholderFactory,
    ) -> Texture:
        """Register a single-frame image.

        Args:
            key: Texture key sprites refer to
            filename: File name relative to the assets directory
            size: (width, height) used for the placeholder
            placeholder: Builds the stand-in frame when the file is missing
        """
        data = _read_rgba(self.base_path / filename)
        if data is None:
            texture = Texture(key, [placeholder(*size)], placeholder=True)
        else:
            texture = Texture(key, [data])

        self._textures[key] = texture
        logger.debug(f"Loaded image '{key}' {texture.width}x{texture.height}")
        return texture

    def load_spritesheet(
        self,
        key: str,
        filename: str,
        frame_width: int,
        frame_height: int,
        placeholder: PlaceholderFactory,
        placeholder_frames: int = 3,
    ) -> Texture:
        """Register a spritesheet sliced row-major into fixed-size frames."""
        data = _read_rgba(self.base_path / filename)

        frames: list[Frame] = []
        if data is not None:
            rows = data.shape[0] // frame_height
            cols = data.shape[1] // frame_width
            for row in range(rows):
                for col in range(cols):
                    y = row * frame_height
                    x = col * frame_width
                    frames.append(data[y:y + frame_height, x:x + frame_width].copy())

        if not frames:
            if data is not None:
                logger.warning(
                    f"Spritesheet '{key}' smaller than one {frame_width}x{frame_height} frame"
                )
            frames = [placeholder(frame_width, frame_height) for _ in range(placeholder_frames)]
            texture = Texture(key, frames, placeholder=True)
        else:
            texture = Texture(key, frames)

        self._textures[key] = texture
        logger.debug(f"Loaded spritesheet '{key}' with {texture.frame_count} frames")
        return texture
