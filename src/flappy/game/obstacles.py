"""
Obstacle pairs: creation on a timer, bookkeeping, and culling.

Each pair is a top and a bottom segment sharing one x position and one
gap centre. Only the top segment takes part in scoring; the bottom one
is created already marked as scored so a pair can never count twice.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional
import logging
import random

from flappy.config.settings import GameSettings
from flappy.engine.physics import ArcadePhysics
from flappy.engine.sprites import DisplayList, Sprite

logger = logging.getLogger(__name__)

PIPE_KEY = "pipe"
PIPE_DEPTH = 5


@dataclass(eq=False)
class ObstacleSegment:
    """One half of an obstacle pair."""

    sprite: Sprite
    pair_id: int
    is_top: bool
    scored: bool
    destroyed: bool = False

    @property
    def x(self) -> float:
        return self.sprite.x

    @property
    def velocity_x(self) -> float:
        return self.sprite.body.velocity_x if self.sprite.body else 0.0

    def stop(self) -> None:
        if self.sprite.body is not None:
            self.sprite.body.velocity_x = 0.0


@dataclass(eq=False)
class ObstaclePair:
    """Both segments of one spawn plus the gap they leave."""

    pair_id: int
    gap_center: int
    top: ObstacleSegment
    bottom: ObstacleSegment


class ObstacleCollection:
    """
    Segments currently in play, in creation order.

    Removal destroys the segment's sprite and happens at most once per
    segment; removing something already gone returns False.
    """

    def __init__(self, on_destroy: Optional[Callable[[ObstacleSegment], None]] = None) -> None:
        self._segments: list[ObstacleSegment] = []
        self._on_destroy = on_destroy

    def __iter__(self) -> Iterator[ObstacleSegment]:
        return iter(list(self._segments))

    def __len__(self) -> int:
        return len(self._segments)

    def __contains__(self, segment: ObstacleSegment) -> bool:
        return segment in self._segments

    @property
    def sprites(self) -> list[Sprite]:
        return [s.sprite for s in self._segments]

    def pair_ids(self) -> list[int]:
        """Distinct pair ids, oldest first."""
        seen: list[int] = []
        for segment in self._segments:
            if segment.pair_id not in seen:
                seen.append(segment.pair_id)
        return seen

    def add_pair(self, pair: ObstaclePair) -> None:
        self._segments.append(pair.top)
        self._segments.append(pair.bottom)

    def remove(self, segment: ObstacleSegment) -> bool:
        """Destroy and drop one segment."""
        if segment.destroyed or segment not in self._segments:
            return False

        self._segments.remove(segment)
        segment.destroyed = True
        segment.sprite.destroy()
        if self._on_destroy is not None:
            self._on_destroy(segment)
        return True

    def clear(self) -> int:
        """Destroy every segment. Returns how many were removed."""
        removed = 0
        for segment in list(self._segments):
            if self.remove(segment):
                removed += 1
        return removed

    def stop_all(self) -> None:
        """Freeze every segment in place."""
        for segment in self._segments:
            segment.stop()


class ObstacleSpawner:
    """
    Creates obstacle pairs on a fixed interval and culls old segments.

    Args:
        settings: Gap size, speed, interval and spawn/cull positions
        physics: World the segments are simulated in
        display_list: Where new sprites are drawn
        pipe_size: Unscaled (width, height) of the pipe texture
        rng: Random source for the gap centre
    """

    def __init__(
        self,
        settings: GameSettings,
        physics: ArcadePhysics,
        display_list: DisplayList,
        pipe_size: tuple[int, int],
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.physics = physics
        self.display_list = display_list
        self.pipe_width, self.pipe_height = pipe_size
        self.rng = rng or random.Random()
        self.last_spawn_time = 0.0
        self._next_pair_id = 0

    def reset_timer(self, now: float) -> None:
        """Restart the interval from ``now``."""
        self.last_spawn_time = now

    def is_due(self, now: float) -> bool:
        return now > self.last_spawn_time + self.settings.spawn_interval

    def update(self, obstacles: ObstacleCollection, now: float) -> Optional[ObstaclePair]:
        """Spawn a pair if the interval has elapsed since the last one."""
        if not self.is_due(now):
            return None
        pair = self.spawn(obstacles)
        self.last_spawn_time = now
        return pair

    def spawn(self, obstacles: ObstacleCollection) -> ObstaclePair:
        """Create a pair around a random gap centre and add it to play."""
        s = self.settings
        gap_center = self.rng.randint(s.gap_min, s.gap_max)
        half_gap = s.pipe_gap / 2
        half_pipe = self.pipe_height / 2

        # Top segment's lower edge and bottom segment's upper edge bound the gap
        top = self._make_segment(gap_center - half_gap - half_pipe, flip_y=True)
        bottom = self._make_segment(gap_center + half_gap + half_pipe, flip_y=False)

        pair_id = self._next_pair_id
        self._next_pair_id += 1

        pair = ObstaclePair(
            pair_id=pair_id,
            gap_center=gap_center,
            top=ObstacleSegment(top, pair_id, is_top=True, scored=False),
            bottom=ObstacleSegment(bottom, pair_id, is_top=False, scored=True),
        )
        obstacles.add_pair(pair)

        logger.debug(f"Spawned pair {pair_id} with gap at {gap_center}")
        return pair

    def _make_segment(self, y: float, flip_y: bool) -> Sprite:
        sprite = Sprite(
            key=PIPE_KEY,
            x=self.settings.spawn_x,
            y=y,
            width=self.pipe_width,
            height=self.pipe_height,
            flip_y=flip_y,
            depth=PIPE_DEPTH,
        )
        self.physics.add(sprite)
        sprite.body.allow_gravity = False
        sprite.body.velocity_x = self.settings.pipe_speed
        self.display_list.add(sprite)
        return sprite

    def cull(self, obstacles: ObstacleCollection) -> int:
        """Remove segments that have scrolled past the left edge."""
        culled = 0
        for segment in obstacles:
            if segment.x < self.settings.cull_x and obstacles.remove(segment):
                culled += 1
        if culled:
            logger.debug(f"Culled {culled} segments")
        return culled
