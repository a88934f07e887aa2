"""Draws the scene's display list onto the canvas surface."""

from typing import Optional
import logging

import pygame

from flappy.engine.assets import AssetRegistry
from flappy.engine.fonts import FontFace
from flappy.engine.sprites import DisplayList, Sprite, TileSprite
from flappy.engine.text import TextElement, render_text

logger = logging.getLogger(__name__)


class SceneRenderer:
    """
    Renders sprites, tile sprites and text in depth order.

    Scaled and flipped sprite surfaces are cached per (key, frame, scale,
    flip); rotation is applied per frame since the angle changes
    continuously.
    """

    def __init__(self, assets: AssetRegistry, canvas: pygame.Surface) -> None:
        self.assets = assets
        self.canvas = canvas
        self.font_face: Optional[FontFace] = None
        self._sprite_cache: dict[tuple, pygame.Surface] = {}
        self._text_cache: dict[int, tuple[tuple, pygame.Surface]] = {}

    def render(self, display_list: DisplayList, clear_color=(0, 0, 0)) -> None:
        """Clear the canvas and draw every visible item."""
        self.canvas.fill(clear_color)

        for item in display_list.sorted():
            if not item.visible or not item.active:
                continue

            if isinstance(item, TileSprite):
                self._draw_tile_sprite(item)
            elif isinstance(item, Sprite):
                self._draw_sprite(item)
            elif isinstance(item, TextElement):
                self._draw_text(item)

    def _sprite_surface(self, sprite: Sprite) -> Optional[pygame.Surface]:
        if sprite.key not in self.assets:
            return None

        cache_key = (sprite.key, sprite.frame, sprite.scale, sprite.flip_y)
        cached = self._sprite_cache.get(cache_key)
        if cached is None:
            surface = self.assets.get(sprite.key).surface(sprite.frame)
            size = (max(1, round(sprite.display_width)), max(1, round(sprite.display_height)))
            if surface.get_size() != size:
                surface = pygame.transform.scale(surface, size)
            if sprite.flip_y:
                surface = pygame.transform.flip(surface, False, True)
            self._sprite_cache[cache_key] = surface
            cached = surface
        return cached

    def _draw_sprite(self, sprite: Sprite) -> None:
        surface = self._sprite_surface(sprite)
        if surface is None:
            return

        if sprite.angle:
            # pygame rotates counter-clockwise; scene angles are clockwise
            surface = pygame.transform.rotate(surface, -sprite.angle)

        rect = surface.get_rect(center=(round(sprite.x), round(sprite.y)))
        self.canvas.blit(surface, rect)

    def _draw_tile_sprite(self, sprite: TileSprite) -> None:
        if sprite.key not in self.assets:
            return

        texture = self.assets.get(sprite.key).surface(sprite.frame)
        tw, th = texture.get_size()
        area = pygame.Rect(
            round(sprite.left), round(sprite.top),
            round(sprite.display_width), round(sprite.display_height),
        )

        previous_clip = self.canvas.get_clip()
        self.canvas.set_clip(area.clip(previous_clip))

        offset = int(sprite.tile_position_x) % tw
        y = area.top
        while y < area.bottom:
            x = area.left - offset
            while x < area.right:
                self.canvas.blit(texture, (x, y))
                x += tw
            y += th

        self.canvas.set_clip(previous_clip)

    def _draw_text(self, element: TextElement) -> None:
        if self.font_face is None:
            return

        signature = (element.text, element.style, id(self.font_face))
        cached = self._text_cache.get(id(element))
        if cached is None or cached[0] != signature:
            cached = (signature, render_text(self.font_face, element))
            self._text_cache[id(element)] = cached

        surface = cached[1]
        rect = surface.get_rect(center=(round(element.x), round(element.y)))
        self.canvas.blit(surface, rect)
