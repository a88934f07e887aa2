"""
Arcade physics for the scene.

Velocity integration with per-body gravity, world-bounds clamping and
axis-aligned overlap tests with collider callbacks. Static bodies push
dynamic bodies out of themselves; overlaps between two dynamic bodies
only fire the callback.
"""

from dataclasses import dataclass
from typing import Callable, Iterable
import logging

from flappy.engine.sprites import Sprite

logger = logging.getLogger(__name__)

CollideCallback = Callable[[Sprite, Sprite], None]
TargetSource = Callable[[], Iterable[Sprite]]


@dataclass
class Collider:
    """Pairs one sprite with a source of targets to test against."""

    sprite: Sprite
    targets: TargetSource
    callback: CollideCallback
    active: bool = True


def overlaps(a: Sprite, b: Sprite) -> bool:
    """Strict AABB overlap; touching edges do not count."""
    return (
        a.left < b.right
        and a.right > b.left
        and a.top < b.bottom
        and a.bottom > b.top
    )


class ArcadePhysics:
    """
    Steps every registered body once per frame.

    Args:
        gravity: Downward acceleration in units/s^2
        width: World width used for bounds clamping
        height: World height used for bounds clamping
        max_step_ms: Upper bound on a single step, so a stalled frame
            does not teleport bodies through obstacles
    """

    def __init__(
        self,
        gravity: float,
        width: int,
        height: int,
        max_step_ms: float = 50.0,
    ) -> None:
        self.gravity = gravity
        self.width = width
        self.height = height
        self.max_step_ms = max_step_ms
        self._sprites: list[Sprite] = []
        self._colliders: list[Collider] = []

    @property
    def sprites(self) -> list[Sprite]:
        return list(self._sprites)

    def add(self, sprite: Sprite, static: bool = False) -> Sprite:
        """Give the sprite a body and start simulating it."""
        sprite.enable_body(static=static)
        if sprite not in self._sprites:
            self._sprites.append(sprite)
        return sprite

    def remove(self, sprite: Sprite) -> bool:
        if sprite in self._sprites:
            self._sprites.remove(sprite)
            return True
        return False

    def add_collider(
        self,
        sprite: Sprite,
        targets: TargetSource,
        callback: CollideCallback,
    ) -> Collider:
        """Register a collision check between ``sprite`` and ``targets()``."""
        collider = Collider(sprite=sprite, targets=targets, callback=callback)
        self._colliders.append(collider)
        return collider

    def step(self, delta_ms: float) -> None:
        """Integrate velocities, clamp to bounds, then run colliders."""
        dt = min(delta_ms, self.max_step_ms) / 1000.0

        for sprite in self._sprites:
            body = sprite.body
            if body is None or not body.enabled or body.static or not sprite.active:
                continue

            if body.allow_gravity:
                body.velocity_y += self.gravity * dt

            sprite.x += body.velocity_x * dt
            sprite.y += body.velocity_y * dt

            if body.collide_world_bounds:
                self._clamp_to_world(sprite)

        for collider in self._colliders:
            if collider.active:
                self._run_collider(collider)

    def _clamp_to_world(self, sprite: Sprite) -> None:
        body = sprite.body
        half_w = sprite.display_width / 2
        half_h = sprite.display_height / 2

        if sprite.left < 0:
            sprite.x = half_w
            body.velocity_x = 0.0
        elif sprite.right > self.width:
            sprite.x = self.width - half_w
            body.velocity_x = 0.0

        if sprite.top < 0:
            sprite.y = half_h
            body.velocity_y = 0.0
        elif sprite.bottom > self.height:
            sprite.y = self.height - half_h
            body.velocity_y = 0.0

    def _run_collider(self, collider: Collider) -> None:
        sprite = collider.sprite
        if not sprite.active or sprite.body is None or not sprite.body.enabled:
            return

        # Snapshot: the callback may remove targets
        for target in list(collider.targets()):
            if not target.active:
                continue
            if target.body is not None and not target.body.enabled:
                continue
            if not overlaps(sprite, target):
                continue

            if target.body is not None and target.body.static:
                self._separate(sprite, target)

            collider.callback(sprite, target)

    def _separate(self, sprite: Sprite, static: Sprite) -> None:
        """Push ``sprite`` out of ``static`` along the shallower axis."""
        body = sprite.body
        push_up = sprite.bottom - static.top
        push_down = static.bottom - sprite.top
        push_left = sprite.right - static.left
        push_right = static.right - sprite.left

        overlap_y = min(push_up, push_down)
        overlap_x = min(push_left, push_right)

        if overlap_y <= overlap_x:
            if push_up < push_down:
                sprite.y -= push_up
            else:
                sprite.y += push_down
            body.velocity_y = 0.0
        else:
            if push_left < push_right:
                sprite.x -= push_left
            else:
                sprite.x += push_right
            body.velocity_x = 0.0

        logger.debug(f"Separated {sprite.key} from static {static.key}")
