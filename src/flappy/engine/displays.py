"""
Text displays that live outside the game canvas.

The score strip below the canvas is one of these: the game only ever
calls ``set_text`` on it.
"""

from abc import ABC, abstractmethod

import pygame


class TextDisplay(ABC):
    """Abstract base class for a single-line text readout."""

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Replace the displayed text."""
        ...

    @abstractmethod
    def get_text(self) -> str:
        """Get the displayed text."""
        ...


class ScoreLabel(TextDisplay):
    """
    Score readout rendered in a strip under the canvas.

    Holds only a text buffer, so it works without a window.
    """

    def __init__(self, text: str = "") -> None:
        self._text = text

    def set_text(self, text: str) -> None:
        self._text = text

    def get_text(self) -> str:
        return self._text

    def render(
        self,
        font: pygame.font.Font,
        size: tuple[int, int],
        bg_color: tuple[int, int, int] = (20, 20, 30),
        text_color: tuple[int, int, int] = (255, 255, 255),
    ) -> pygame.Surface:
        """Render the strip with the text centred."""
        surface = pygame.Surface(size)
        surface.fill(bg_color)

        text_surface = font.render(self._text, True, text_color)
        text_rect = text_surface.get_rect(center=(size[0] // 2, size[1] // 2))
        surface.blit(text_surface, text_rect)

        return surface
