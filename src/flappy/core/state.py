"""
State machine for the game session.

States:
    NOT_STARTED: Player waiting on the start prompt, gravity off
    PLAYING: Obstacles spawning, score counting
    GAME_OVER: Everything frozen until the next flap
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Game session states."""
    NOT_STARTED = auto()
    PLAYING = auto()
    GAME_OVER = auto()


StateListener = Callable[[GameState, GameState], None]


class StateMachine:
    """
    Manages game state and transitions.

    Only the transitions listed in VALID_TRANSITIONS are accepted;
    anything else is refused and logged. Listeners are notified after
    every successful transition.
    """

    VALID_TRANSITIONS: list[tuple[GameState, GameState]] = [
        (GameState.NOT_STARTED, GameState.PLAYING),   # First flap
        (GameState.PLAYING, GameState.GAME_OVER),     # Collision
        (GameState.GAME_OVER, GameState.NOT_STARTED), # Flap to restart
    ]

    def __init__(self, initial_state: GameState = GameState.NOT_STARTED) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameState:
        """Get current state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == GameState.PLAYING

    @property
    def is_game_over(self) -> bool:
        return self._state == GameState.GAME_OVER

    def can_transition(self, to_state: GameState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameState) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

