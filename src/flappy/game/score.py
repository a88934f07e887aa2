"""Score counting and the external score readout."""

from typing import Optional
import logging

from flappy.core.events import EventBus, Event, EventType
from flappy.engine.displays import TextDisplay
from flappy.game.obstacles import ObstacleCollection

logger = logging.getLogger(__name__)

SCORE_FORMAT = "Score: {score}"


class ScoreTracker:
    """
    Counts cleared obstacle pairs and mirrors the count to a display.

    The display is updated synchronously on every change.
    """

    def __init__(self, display: TextDisplay, event_bus: Optional[EventBus] = None) -> None:
        self.display = display
        self.event_bus = event_bus
        self._score = 0
        self._refresh()

    @property
    def score(self) -> int:
        return self._score

    def reset(self) -> None:
        self._score = 0
        self._refresh()

    def increment(self) -> None:
        self._score += 1
        logger.debug(f"Score: {self._score}")
        self._refresh()

    def check(self, obstacles: ObstacleCollection, player_x: float) -> int:
        """Score every unscored segment the player has passed.

        Returns:
            Number of points added this call
        """
        added = 0
        for segment in obstacles:
            if not segment.scored and segment.x < player_x:
                segment.scored = True
                self.increment()
                added += 1
        return added

    def _refresh(self) -> None:
        self.display.set_text(SCORE_FORMAT.format(score=self._score))
        if self.event_bus is not None:
            self.event_bus.emit(Event(
                EventType.SCORE_CHANGED,
                data={"score": self._score},
                source="score",
            ))
