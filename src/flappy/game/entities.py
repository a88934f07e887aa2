"""The player-controlled sprite."""

from flappy.engine.sprites import Sprite


class PlayerEntity:
    """
    Wraps the player sprite and its physics body.

    Created once per scene and reset in place on restart.
    """

    def __init__(self, sprite: Sprite, start_x: float, start_y: float) -> None:
        if sprite.body is None:
            raise ValueError("player sprite needs a physics body")
        self.sprite = sprite
        self.start_x = start_x
        self.start_y = start_y

    @property
    def x(self) -> float:
        return self.sprite.x

    @property
    def y(self) -> float:
        return self.sprite.y

    @property
    def velocity_y(self) -> float:
        return self.sprite.body.velocity_y

    @property
    def angle(self) -> float:
        return self.sprite.angle

    @angle.setter
    def angle(self, value: float) -> None:
        self.sprite.angle = value

    @property
    def gravity_enabled(self) -> bool:
        return self.sprite.body.allow_gravity

    def set_gravity(self, enabled: bool) -> None:
        self.sprite.body.allow_gravity = enabled

    def flap(self, velocity: float) -> None:
        """Replace vertical velocity with the flap impulse."""
        self.sprite.body.velocity_y = velocity

    def freeze(self) -> None:
        """Stop moving and stop falling."""
        self.sprite.body.stop()
        self.set_gravity(False)

    def reset(self) -> None:
        """Back to the spawn point, level and motionless."""
        self.sprite.set_position(self.start_x, self.start_y)
        self.sprite.angle = 0.0
        self.freeze()
