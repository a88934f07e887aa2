"""Game logic: scene, session, obstacles and score."""

from flappy.game.base import BaseScene, SceneContext
from flappy.game.entities import PlayerEntity
from flappy.game.obstacles import ObstacleSegment, ObstaclePair, ObstacleCollection, ObstacleSpawner
from flappy.game.score import ScoreTracker
from flappy.game.session import GameSession
from flappy.game.scene import FlappyScene

__all__ = [
    "BaseScene",
    "SceneContext",
    "PlayerEntity",
    "ObstacleSegment",
    "ObstaclePair",
    "ObstacleCollection",
    "ObstacleSpawner",
    "ScoreTracker",
    "GameSession",
    "FlappyScene",
]
