"""
Display font loading.

The custom font is optional. ``FontLoader.load`` tries the font file,
then each fallback family, then pygame's built-in font, and hands the
result to a single completion callback exactly once, whether or not the
custom font made it.
"""

from pathlib import Path
from typing import Callable, Optional
import logging

import pygame

logger = logging.getLogger(__name__)


class FontFace:
    """A resolved font source that can produce pygame fonts at any size."""

    def __init__(self, path: Optional[Path] = None, name: str = "default", custom: bool = False) -> None:
        self.path = path
        self.name = name
        self.custom = custom
        self._sizes: dict[int, pygame.font.Font] = {}

    def get(self, size: int) -> pygame.font.Font:
        """Get (and cache) a font at the given pixel size."""
        if size not in self._sizes:
            source = str(self.path) if self.path is not None else None
            self._sizes[size] = pygame.font.Font(source, size)
        return self._sizes[size]

    def __repr__(self) -> str:
        return f"FontFace({self.name!r}, custom={self.custom})"


SetupComplete = Callable[[FontFace, bool], None]


class FontLoader:
    """Resolves the display font and signals completion once."""

    def __init__(self, font_file: Optional[Path], fallbacks: list[str]) -> None:
        self.font_file = font_file
        self.fallbacks = fallbacks
        self._completed = False
        self.face: Optional[FontFace] = None

    @property
    def completed(self) -> bool:
        return self._completed

    def load(self, on_complete: SetupComplete) -> None:
        """Resolve the font and invoke ``on_complete(face, custom_active)``."""
        if self._completed:
            logger.debug("Font already loaded, ignoring repeated load")
            return

        if not pygame.font.get_init():
            pygame.font.init()

        face = self._load_custom()
        if face is None:
            face = self._load_fallback()

        self.face = face
        self._completed = True
        on_complete(face, face.custom)

    def _load_custom(self) -> Optional[FontFace]:
        if self.font_file is None:
            return None
        if not self.font_file.exists():
            logger.warning(f"Custom font not found: {self.font_file}")
            return None

        face = FontFace(self.font_file, name=self.font_file.stem, custom=True)
        try:
            # Test render
            face.get(16).render("Score", True, (255, 255, 255))
        except (OSError, pygame.error) as e:
            logger.warning(f"Custom font {self.font_file} failed: {e}")
            return None

        logger.info(f"Using custom font: {self.font_file}")
        return face

    def _load_fallback(self) -> FontFace:
        for family in self.fallbacks:
            path = pygame.font.match_font(family)
            if not path:
                continue
            face = FontFace(Path(path), name=family)
            try:
                face.get(16).render("Score", True, (255, 255, 255))
            except (OSError, pygame.error) as e:
                logger.debug(f"Font {family} failed: {e}")
                continue
            logger.info(f"Using system font: {family}")
            return face

        logger.warning("No fallback font found, using pygame default")
        return FontFace(None, name="default")
