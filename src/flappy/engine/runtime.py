"""
Game window using pygame.

Owns the 900x600 canvas, the score strip underneath it and the frame
loop. Each frame it feeds input devices, emits a TICK event carrying the
elapsed time, then presents whatever was drawn on the canvas.
"""

import asyncio
import logging
from dataclasses import dataclass

import pygame

from flappy.core.events import EventBus, EventType, Event, flap_event, tick_event
from flappy.engine.displays import ScoreLabel
from flappy.engine.input import KeyInput, PointerInput

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    width: int = 900
    height: int = 600
    strip_height: int = 40
    title: str = "Flappy"
    fullscreen: bool = False
    fps: int = 60

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    text_color: tuple[int, int, int] = (255, 255, 255)


class GameWindow:
    """
    Main window hosting the scene.

    Input Mapping:
        SPACE: Flap (polled by the scene, edge-triggered)
        LEFT MOUSE / TOUCH: Flap (pushed as a FLAP event)
        ESC: Exit
    """

    def __init__(
        self,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._time_ms = 0.0

        # Canvas the scene renders into
        self.canvas = pygame.Surface((self.config.width, self.config.height))

        # External score readout
        self.score_display = ScoreLabel()
        self._font: pygame.font.Font | None = None

        # Input devices
        self.keys = KeyInput()
        self.pointer = PointerInput()
        self.pointer.on_press(self._on_pointer_press)

        logger.info("GameWindow created")

    @property
    def time_ms(self) -> float:
        """Milliseconds of simulated time since the loop started."""
        return self._time_ms

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN | pygame.SCALED

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height + self.config.strip_height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _on_pointer_press(self, x: float, y: float) -> None:
        self.event_bus.queue_event(flap_event(source="pointer"))

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                else:
                    self.keys._press(event.key)

            elif event.type == pygame.KEYUP:
                self.keys._release(event.key)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                # Presses on the score strip are outside the canvas
                if event.pos[1] < self.config.height:
                    self.pointer._press(*event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.pointer._release()

    def _present(self) -> None:
        """Blit the canvas and the score strip, then flip."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)
        self._screen.blit(self.canvas, (0, 0))

        if self._font:
            strip = self.score_display.render(
                self._font,
                (self.config.width, self.config.strip_height),
                bg_color=self.config.bg_color,
                text_color=self.config.text_color,
            )
            self._screen.blit(strip, (0, self.config.height))

        pygame.display.flip()

    async def run(self) -> None:
        """Main loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game loop started")

        while self._running:
            # Handle events
            self._handle_events()

            # Pointer flaps are queued; deliver them before the tick
            await self.event_bus.process_queue()

            # Emit tick event
            if self._clock:
                delta = float(self._clock.get_time())
                self._time_ms += delta
                self.event_bus.emit(tick_event(self._time_ms, delta, self._frame_count))

            self._present()

            # Frame timing
            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game window closed")

    def stop(self) -> None:
        """Stop the loop."""
        self._running = False
