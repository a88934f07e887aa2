"""Base class for scenes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging

from flappy.config.settings import Settings
from flappy.core.events import EventBus, Event, EventType
from flappy.engine.assets import AssetRegistry
from flappy.engine.displays import TextDisplay
from flappy.engine.fonts import FontLoader
from flappy.engine.input import KeyInput, PointerInput
from flappy.engine.physics import ArcadePhysics
from flappy.engine.sprites import DisplayList

logger = logging.getLogger(__name__)


@dataclass
class SceneContext:
    """Runtime services handed to a scene."""

    settings: Settings
    event_bus: EventBus
    assets: AssetRegistry
    physics: ArcadePhysics
    fonts: FontLoader
    keys: KeyInput
    pointer: PointerInput
    score_display: TextDisplay
    display_list: DisplayList = field(default_factory=DisplayList)


class BaseScene(ABC):
    """Abstract base class for scenes.

    Lifecycle:
        1. preload() - Register textures
        2. create() - Build game objects and bind input
        3. update(time, delta) - Per-frame logic, driven by TICK
    """

    name: str = "base"

    def __init__(self, context: SceneContext):
        self.context = context
        self._started = False
        self._unsubscribers: list = []

        logger.debug(f"Scene created: {self.name}")

    @property
    def is_started(self) -> bool:
        return self._started

    def start(self) -> None:
        """Run preload and create, then start listening for ticks."""
        if self._started:
            return

        logger.info(f"Starting scene: {self.name}")
        self.preload()
        self.create()
        self._started = True

        self._unsubscribers.append(
            self.context.event_bus.subscribe(EventType.TICK, self._on_tick)
        )

    def stop(self) -> None:
        """Detach from the event bus."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self._started = False
        logger.info(f"Stopped scene: {self.name}")

    def _on_tick(self, event: Event) -> None:
        time_ms = event.data.get("time", 0.0)
        delta_ms = event.data.get("delta", 0.0)
        self.context.physics.step(delta_ms)
        self.update(time_ms, delta_ms)

    @abstractmethod
    def preload(self) -> None:
        """Register textures with the asset registry."""
        pass

    @abstractmethod
    def create(self) -> None:
        """Build the scene's objects."""
        pass

    @abstractmethod
    def update(self, time: float, delta: float) -> None:
        """Per-frame update logic."""
        pass

    def emit_event(self, event_type: EventType, data: dict | None = None) -> None:
        """Emit an event through the event bus."""
        self.context.event_bus.emit(Event(
            type=event_type,
            data=data or {},
            source=f"scene_{self.name}"
        ))
