"""
Application wiring: settings, runtime services, scene and window.
"""

import logging

from flappy.config.settings import Settings, get_settings
from flappy.core.events import EventBus, Event, EventType
from flappy.engine.assets import AssetRegistry
from flappy.engine.fonts import FontLoader
from flappy.engine.physics import ArcadePhysics
from flappy.engine.renderer import SceneRenderer
from flappy.engine.runtime import GameWindow, WindowConfig
from flappy.game.base import SceneContext
from flappy.game.scene import FlappyScene

logger = logging.getLogger(__name__)


class FlappyApp:
    """Main application integrating all systems."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        display = self.settings.display

        # Core systems
        self.event_bus = EventBus()

        # Window
        self.window_config = WindowConfig(
            width=display.width,
            height=display.height,
            strip_height=display.score_strip_height,
            title=display.title,
            fullscreen=display.fullscreen,
            fps=display.fps,
        )
        self.window = GameWindow(config=self.window_config, event_bus=self.event_bus)

        # Runtime services
        self.assets = AssetRegistry(self.settings.assets_path)
        self.physics = ArcadePhysics(
            gravity=self.settings.game.gravity,
            width=display.width,
            height=display.height,
        )
        self.fonts = FontLoader(
            self.settings.asset(self.settings.assets.font_file),
            self.settings.assets.font_fallbacks,
        )
        self.renderer = SceneRenderer(self.assets, self.window.canvas)

        # Scene
        self.context = SceneContext(
            settings=self.settings,
            event_bus=self.event_bus,
            assets=self.assets,
            physics=self.physics,
            fonts=self.fonts,
            keys=self.window.keys,
            pointer=self.window.pointer,
            score_display=self.window.score_display,
        )
        self.scene = FlappyScene(self.context)

        self._setup_event_handlers()

        logger.info("FlappyApp initialized")

    def _setup_event_handlers(self) -> None:
        """Subscribe to lifecycle events."""
        self.event_bus.subscribe(EventType.STATE_CHANGED, self._on_state_changed)
        self.event_bus.subscribe(EventType.SHUTDOWN, self._on_shutdown)

    def _on_state_changed(self, event: Event) -> None:
        logger.debug(f"Game state {event.data.get('from')} -> {event.data.get('to')}")

    def _on_shutdown(self, event: Event) -> None:
        self.scene.stop()

    def _on_tick(self, event: Event) -> None:
        """Draw the frame the scene just updated."""
        if self.renderer.font_face is None:
            self.renderer.font_face = self.scene.font_face
        self.renderer.render(self.context.display_list)

    async def run(self) -> None:
        """Run the game."""
        logger.info("Starting Flappy...")

        # Scene subscribes to TICK first so rendering sees the updated frame
        self.scene.start()
        self.event_bus.subscribe(EventType.TICK, self._on_tick)

        await self.window.run()
