"""On-canvas text objects with an outline stroke."""

from dataclasses import dataclass

import pygame

from flappy.engine.fonts import FontFace


@dataclass
class TextStyle:
    """Font size and colours for a text element."""

    font_size: int = 16
    fill: str = "#ffffff"
    stroke: str = "#000000"
    stroke_thickness: int = 0
    padding_x: int = 10
    padding_y: int = 5


@dataclass
class TextElement:
    """A line of text centred on (x, y)."""

    text: str
    x: float
    y: float
    style: TextStyle
    depth: int = 0
    visible: bool = True
    active: bool = True

    def set_visible(self, visible: bool) -> None:
        self.visible = visible


def render_text(face: FontFace, element: TextElement) -> pygame.Surface:
    """Render a text element, padded, with its stroke drawn underneath."""
    style = element.style
    font = face.get(style.font_size)
    body = font.render(element.text, True, pygame.Color(style.fill))

    radius = style.stroke_thickness // 2
    width = body.get_width() + 2 * (radius + style.padding_x)
    height = body.get_height() + 2 * (radius + style.padding_y)
    surface = pygame.Surface((width, height), pygame.SRCALPHA)

    origin = (radius + style.padding_x, radius + style.padding_y)

    if radius > 0:
        outline = font.render(element.text, True, pygame.Color(style.stroke))
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if dx * dx + dy * dy > radius * radius:
                    continue
                surface.blit(outline, (origin[0] + dx, origin[1] + dy))

    surface.blit(body, origin)
    return surface
