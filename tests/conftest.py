import os
import random

# Headless SDL before pygame is imported anywhere
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from flappy.config.settings import Settings
from flappy.core.events import EventBus
from flappy.engine.assets import AssetRegistry
from flappy.engine.displays import ScoreLabel
from flappy.engine.fonts import FontLoader
from flappy.engine.input import KeyInput, PointerInput
from flappy.engine.physics import ArcadePhysics
from flappy.game.base import SceneContext
from flappy.game.scene import FlappyScene


@pytest.fixture
def settings(tmp_path) -> Settings:
    # Empty assets dir: every texture falls back to its placeholder
    return Settings(assets_path=tmp_path)


@pytest.fixture
def physics(settings) -> ArcadePhysics:
    width, height = settings.canvas_size
    return ArcadePhysics(gravity=settings.game.gravity, width=width, height=height)


@pytest.fixture
def scene_context(settings, physics) -> SceneContext:
    return SceneContext(
        settings=settings,
        event_bus=EventBus(),
        assets=AssetRegistry(settings.assets_path),
        physics=physics,
        fonts=FontLoader(None, []),
        keys=KeyInput(),
        pointer=PointerInput(),
        score_display=ScoreLabel(),
    )


@pytest.fixture
def scene(scene_context) -> FlappyScene:
    scene = FlappyScene(scene_context, rng=random.Random(1234))
    scene.start()
    yield scene
    scene.stop()
