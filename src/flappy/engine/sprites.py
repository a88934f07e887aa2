"""
Display objects for the scene.

Sprites are plain data: a texture key, a centre position and a few
transform properties. The renderer looks the texture up by key, so game
logic can create and move sprites without a display.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class Body:
    """Arcade physics body attached to a sprite."""

    velocity_x: float = 0.0
    velocity_y: float = 0.0
    allow_gravity: bool = True
    static: bool = False
    collide_world_bounds: bool = False
    enabled: bool = True

    def stop(self) -> None:
        """Zero both velocity components."""
        self.velocity_x = 0.0
        self.velocity_y = 0.0


@dataclass(eq=False)
class Sprite:
    """A textured, positioned display object.

    Position is the sprite centre. ``width``/``height`` are the unscaled
    frame size; the scaled size is used for drawing and collisions.
    """

    key: str
    x: float
    y: float
    width: int
    height: int
    scale: float = 1.0
    angle: float = 0.0
    flip_y: bool = False
    depth: int = 0
    frame: int = 0
    visible: bool = True
    active: bool = True
    body: Optional[Body] = None

    @property
    def display_width(self) -> float:
        return self.width * self.scale

    @property
    def display_height(self) -> float:
        return self.height * self.scale

    @property
    def left(self) -> float:
        return self.x - self.display_width / 2

    @property
    def right(self) -> float:
        return self.x + self.display_width / 2

    @property
    def top(self) -> float:
        return self.y - self.display_height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.display_height / 2

    def enable_body(self, static: bool = False) -> Body:
        """Attach a physics body if the sprite has none."""
        if self.body is None:
            self.body = Body(static=static, allow_gravity=not static)
        return self.body

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def destroy(self) -> None:
        """Mark the sprite as gone; renderer and physics skip it."""
        self.active = False
        self.visible = False
        if self.body is not None:
            self.body.enabled = False


@dataclass(eq=False)
class TileSprite(Sprite):
    """A sprite whose texture repeats horizontally.

    ``tile_position_x`` offsets the texture inside the sprite bounds,
    which is how the background scrolls without moving.
    """

    tile_position_x: float = 0.0


@dataclass
class DisplayList:
    """Sprites and text owned by the scene, drawn in depth order."""

    items: list = field(default_factory=list)

    def add(self, item):
        self.items.append(item)
        return item

    def prune(self) -> None:
        """Drop destroyed sprites."""
        self.items = [i for i in self.items if getattr(i, "active", True)]

    def sorted(self) -> list:
        # Stable sort keeps creation order within one depth
        return sorted(self.items, key=lambda i: i.depth)
