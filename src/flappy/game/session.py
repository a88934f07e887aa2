"""Per-run game state bundled in one place."""

from dataclasses import dataclass

from flappy.core.state import GameState, StateMachine
from flappy.game.entities import PlayerEntity
from flappy.game.obstacles import ObstacleCollection, ObstacleSpawner
from flappy.game.score import ScoreTracker


@dataclass
class GameSession:
    """
    Everything a run mutates: state, player, obstacles and score.

    Owned by the scene and reset in place on restart.
    """

    state_machine: StateMachine
    player: PlayerEntity
    obstacles: ObstacleCollection
    spawner: ObstacleSpawner
    score: ScoreTracker

    @property
    def state(self) -> GameState:
        return self.state_machine.state

    @property
    def is_playing(self) -> bool:
        return self.state_machine.is_playing

    @property
    def is_game_over(self) -> bool:
        return self.state_machine.is_game_over
