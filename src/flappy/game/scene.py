"""
The one playable scene.

Builds the world on start, turns flap input into state transitions, and
runs the spawner and score tracker every frame.
"""

from typing import Optional
import logging
import random

import pygame

from flappy.core.events import Event, EventType
from flappy.core.state import GameState, StateMachine
from flappy.engine.fonts import FontFace
from flappy.engine.sprites import Sprite, TileSprite
from flappy.engine.text import TextElement, TextStyle
from flappy.game import placeholders
from flappy.game.base import BaseScene, SceneContext
from flappy.game.entities import PlayerEntity
from flappy.game.obstacles import ObstacleCollection, ObstacleSpawner, PIPE_KEY
from flappy.game.score import ScoreTracker
from flappy.game.session import GameSession

logger = logging.getLogger(__name__)

BACKGROUND_KEY = "background"
ROAD_KEY = "road"
BIRD_KEY = "bird"

BACKGROUND_DEPTH = 0
ROAD_DEPTH = 10
PLAYER_DEPTH = 20
TEXT_DEPTH = 30


def clamp(value: float, low: float, high: float) -> float:
    """Limit ``value`` to the closed range [low, high]."""
    return max(low, min(high, value))


class FlappyScene(BaseScene):
    name = "flappy"

    START_TEXT = "Tap or Press SPACE to Start"
    GAME_OVER_TEXT = "GAME OVER"
    RESTART_TEXT = "Tap or Press SPACE to Restart"

    FLAP_KEY = pygame.K_SPACE

    def __init__(self, context: SceneContext, rng: Optional[random.Random] = None):
        super().__init__(context)
        self.settings = context.settings.game
        self._rng = rng

        self.state_machine = StateMachine(GameState.NOT_STARTED)
        self.state_machine.add_listener(self._on_state_changed)

        self.session: Optional[GameSession] = None
        self.background: Optional[TileSprite] = None
        self.road: Optional[Sprite] = None

        # Created in the second setup phase, once the font is resolved
        self.font_face: Optional[FontFace] = None
        self.start_text: Optional[TextElement] = None
        self.game_over_text: Optional[TextElement] = None
        self.restart_text: Optional[TextElement] = None
        self._prompt_visible = {"start": True, "game_over": False, "restart": False}

        self.now = 0.0
        # Set by FLAP events, consumed by the next update
        self._pending_flap = False

    @property
    def state(self) -> GameState:
        return self.state_machine.state

    @property
    def setup_complete(self) -> bool:
        return self.font_face is not None

    # Setup

    def preload(self) -> None:
        assets = self.context.assets
        names = self.context.settings.assets
        canvas = self.context.settings.canvas_size

        assets.load_image(BACKGROUND_KEY, names.background, canvas, placeholders.sky)
        assets.load_image(PIPE_KEY, names.pipe, names.pipe_size, placeholders.column)
        assets.load_image(ROAD_KEY, names.road, names.road_size, placeholders.road)
        assets.load_spritesheet(
            BIRD_KEY, names.bird,
            names.bird_frame_width, names.bird_frame_height,
            placeholders.bird,
        )

    def create(self) -> None:
        ctx = self.context
        g = self.settings
        width, height = ctx.settings.canvas_size
        physics = ctx.physics
        display_list = ctx.display_list

        self.background = display_list.add(TileSprite(
            key=BACKGROUND_KEY, x=width / 2, y=height / 2,
            width=width, height=height, depth=BACKGROUND_DEPTH,
        ))

        road_texture = ctx.assets.get(ROAD_KEY)
        self.road = Sprite(
            key=ROAD_KEY, x=g.road_x, y=g.road_y,
            width=road_texture.width, height=road_texture.height, depth=ROAD_DEPTH,
        )
        physics.add(self.road, static=True)
        display_list.add(self.road)

        bird_texture = ctx.assets.get(BIRD_KEY)
        bird = Sprite(
            key=BIRD_KEY, x=g.player_start_x, y=g.player_start_y,
            width=bird_texture.width, height=bird_texture.height,
            scale=g.player_scale, depth=PLAYER_DEPTH,
        )
        physics.add(bird)
        bird.body.collide_world_bounds = True
        bird.body.allow_gravity = False  # Off until the first flap
        display_list.add(bird)

        obstacles = ObstacleCollection(on_destroy=lambda segment: physics.remove(segment.sprite))
        pipe_texture = ctx.assets.get(PIPE_KEY)
        spawner = ObstacleSpawner(
            g, physics, display_list,
            pipe_size=(pipe_texture.width, pipe_texture.height),
            rng=self._rng,
        )

        self.session = GameSession(
            state_machine=self.state_machine,
            player=PlayerEntity(bird, g.player_start_x, g.player_start_y),
            obstacles=obstacles,
            spawner=spawner,
            score=ScoreTracker(ctx.score_display, ctx.event_bus),
        )

        physics.add_collider(bird, lambda: [self.road], self._on_collide)
        physics.add_collider(bird, lambda: obstacles.sprites, self._on_collide)

        self._unsubscribers.append(
            ctx.event_bus.subscribe(EventType.FLAP, self._on_flap_event)
        )

        ctx.fonts.load(self.on_setup_complete)

    def on_setup_complete(self, face: FontFace, custom_font: bool) -> None:
        """Second setup phase: create the prompts once a font is available."""
        if self.setup_complete:
            return

        if not custom_font:
            logger.info(f"Custom font unavailable, prompts use {face.name}")
        self.font_face = face

        display_list = self.context.display_list
        width, height = self.context.settings.canvas_size
        cx, cy = width / 2, height / 2
        prompt = TextStyle(font_size=16, stroke_thickness=4)
        banner = TextStyle(font_size=40, stroke_thickness=6)

        self.start_text = display_list.add(TextElement(
            self.START_TEXT, cx, cy, prompt, depth=TEXT_DEPTH,
            visible=self._prompt_visible["start"],
        ))
        self.game_over_text = display_list.add(TextElement(
            self.GAME_OVER_TEXT, cx, cy, banner, depth=TEXT_DEPTH,
            visible=self._prompt_visible["game_over"],
        ))
        self.restart_text = display_list.add(TextElement(
            self.RESTART_TEXT, cx, cy + 40, prompt, depth=TEXT_DEPTH,
            visible=self._prompt_visible["restart"],
        ))

        logger.debug("Scene setup complete")

    # Per frame

    def update(self, time: float, delta: float) -> None:
        self.now = time
        session = self.session
        g = self.settings

        self.background.tile_position_x += g.background_scroll

        key_flap = self.context.keys.just_down(self.FLAP_KEY)
        if key_flap or self._pending_flap:
            self._pending_flap = False
            self.flap()

        if session.is_playing:
            player = session.player
            player.angle = clamp(
                player.velocity_y / g.angle_divisor, g.angle_min, g.angle_max
            )
            session.spawner.update(session.obstacles, time)

        session.spawner.cull(session.obstacles)

        if session.is_playing:
            session.score.check(session.obstacles, session.player.x)

        self.context.display_list.prune()

    # Transitions

    def flap(self) -> None:
        """Single entry point for every flap source."""
        state = self.state_machine.state
        if state == GameState.GAME_OVER:
            self.restart_game()
        elif state == GameState.NOT_STARTED:
            self.start_game()
        else:
            self.session.player.flap(self.settings.flap_velocity)

    def start_game(self) -> None:
        if not self.state_machine.transition(GameState.PLAYING):
            return

        player = self.session.player
        player.set_gravity(True)
        player.flap(self.settings.flap_velocity)
        self.session.spawner.reset_timer(self.now)

        self._set_prompt("start", False)

    def game_over(self) -> None:
        # Repeated collisions after the first are expected every frame
        if not self.state_machine.is_playing:
            return
        self.state_machine.transition(GameState.GAME_OVER)

        self.session.obstacles.stop_all()
        self.session.player.freeze()

        self._set_prompt("game_over", True)
        self._set_prompt("restart", True)

    def restart_game(self) -> None:
        if not self.state_machine.transition(GameState.NOT_STARTED):
            return

        session = self.session
        session.obstacles.clear()
        session.player.reset()
        session.score.reset()

        self._set_prompt("game_over", False)
        self._set_prompt("restart", False)
        self._set_prompt("start", True)

    # Callbacks

    def _on_flap_event(self, event: Event) -> None:
        # Applied inside update so transitions see the current frame time
        self._pending_flap = True

    def _on_collide(self, player: Sprite, other: Sprite) -> None:
        if self.state_machine.is_playing:
            self.emit_event(EventType.COLLISION, {"with": other.key})
        self.game_over()

    def _on_state_changed(self, old: GameState, new: GameState) -> None:
        self.emit_event(EventType.STATE_CHANGED, {"from": old.name, "to": new.name})

    def _set_prompt(self, name: str, visible: bool) -> None:
        self._prompt_visible[name] = visible
        element = {
            "start": self.start_text,
            "game_over": self.game_over_text,
            "restart": self.restart_text,
        }[name]
        if element is not None:
            element.set_visible(visible)
