import asyncio

import pygame
import pytest

from flappy.app import FlappyApp
from flappy.core.events import EventBus, EventType, tick_event
from flappy.core.state import GameState
from flappy.engine.runtime import GameWindow, WindowConfig


@pytest.fixture
def window():
    window = GameWindow(WindowConfig(), EventBus())
    window._init_pygame()
    yield window
    window._cleanup()


def test_space_and_escape_routing(window):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))
    window._running = True
    window._handle_events()
    assert window.keys.just_down(pygame.K_SPACE)

    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    window._handle_events()
    assert not window._running


def test_canvas_press_queues_flap(window):
    flaps = []
    window.event_bus.subscribe(EventType.FLAP, flaps.append)

    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(100, 100), button=1))
    window._handle_events()
    assert flaps == []  # queued, not yet delivered

    asyncio.run(window.event_bus.process_queue())
    assert len(flaps) == 1
    assert flaps[0].source == "pointer"


def test_press_on_score_strip_is_ignored(window):
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(100, 620), button=1))
    window._handle_events()
    assert not window.pointer.is_pressed()
    assert window.event_bus._queue.empty()


def test_app_wires_scene_to_window(settings):
    app = FlappyApp(settings)
    app.scene.start()
    app.event_bus.subscribe(EventType.TICK, app._on_tick)

    assert app.window.score_display.get_text() == "Score: 0"

    app.scene.flap()
    app.event_bus.emit(tick_event(16.0, 16.0, 1))

    assert app.scene.state == GameState.PLAYING
    assert app.renderer.font_face is app.scene.font_face

    app.event_bus.emit(tick_event(32.0, 16.0, 2))
    app._on_shutdown(None)
    assert not app.scene.is_started
