import pygame
import pytest

from flappy.core.events import EventType, flap_event, tick_event
from flappy.core.state import GameState
from flappy.game.scene import clamp


def start(scene):
    scene.flap()
    assert scene.state == GameState.PLAYING


def crash(scene):
    scene._on_collide(scene.session.player.sprite, scene.road)
    assert scene.state == GameState.GAME_OVER


def test_scene_builds_initial_world(scene, scene_context):
    session = scene.session
    assert scene.state == GameState.NOT_STARTED
    assert scene.setup_complete

    player = session.player
    assert (player.x, player.y) == (80, 300)
    assert not player.gravity_enabled
    assert player.sprite.display_width == 32
    assert player.sprite.display_height == 48

    assert (scene.road.x, scene.road.y) == (450, 590)
    assert scene.road.body.static

    assert len(session.obstacles) == 0
    assert scene_context.score_display.get_text() == "Score: 0"

    assert scene.start_text.visible
    assert not scene.game_over_text.visible
    assert not scene.restart_text.visible


def test_prompts_are_centred(scene):
    assert (scene.start_text.x, scene.start_text.y) == (450, 300)
    assert (scene.game_over_text.x, scene.game_over_text.y) == (450, 300)
    assert (scene.restart_text.x, scene.restart_text.y) == (450, 340)
    assert scene.game_over_text.style.font_size == 40


def test_player_does_not_fall_before_start(scene, scene_context):
    for frame in range(1, 30):
        scene_context.event_bus.emit(tick_event(frame * 16.0, 16.0, frame))
    assert scene.session.player.y == 300
    assert scene.state == GameState.NOT_STARTED
    assert len(scene.session.obstacles) == 0


def test_first_flap_starts_game(scene):
    start(scene)
    player = scene.session.player
    assert player.gravity_enabled
    assert player.velocity_y == -350
    assert not scene.start_text.visible


def test_flaps_while_playing_reset_velocity(scene):
    start(scene)
    player = scene.session.player
    player.sprite.body.velocity_y = 120.0
    last_spawn = scene.session.spawner.last_spawn_time

    scene.flap()

    assert scene.state == GameState.PLAYING
    assert player.velocity_y == -350
    assert scene.session.spawner.last_spawn_time == last_spawn


def test_rotation_follows_vertical_velocity(scene):
    start(scene)
    player = scene.session.player

    scene.update(10.0, 16.0)
    assert player.angle == -30

    player.sprite.body.velocity_y = 200.0
    scene.update(20.0, 16.0)
    assert player.angle == pytest.approx(20.0)

    player.sprite.body.velocity_y = 5000.0
    scene.update(30.0, 16.0)
    assert player.angle == 90


def test_background_scrolls_in_every_state(scene):
    scene.update(16.0, 16.0)
    scene.update(32.0, 16.0)
    assert scene.background.tile_position_x == pytest.approx(1.0)

    start(scene)
    crash(scene)
    scene.update(48.0, 16.0)
    assert scene.background.tile_position_x == pytest.approx(1.5)


def test_space_is_edge_triggered(scene, scene_context):
    keys = scene_context.keys
    keys._press(pygame.K_SPACE)
    scene.update(16.0, 16.0)
    assert scene.state == GameState.PLAYING

    player = scene.session.player
    player.sprite.body.velocity_y = 100.0
    scene.update(32.0, 16.0)  # still held
    assert player.velocity_y == 100.0

    keys._release(pygame.K_SPACE)
    keys._press(pygame.K_SPACE)
    scene.update(48.0, 16.0)
    assert player.velocity_y == -350


def test_flap_event_applies_on_next_tick(scene, scene_context):
    bus = scene_context.event_bus
    bus.emit(flap_event(source="pointer"))
    assert scene.state == GameState.NOT_STARTED

    bus.emit(tick_event(16.0, 16.0, 1))
    assert scene.state == GameState.PLAYING
    assert scene.session.player.velocity_y == -350


def test_pointer_start_uses_current_frame_time(scene, scene_context):
    bus = scene_context.event_bus
    for frame in range(1, 11):
        bus.emit(tick_event(frame * 100.0, 100.0, frame))

    bus.emit(flap_event(source="pointer"))
    bus.emit(tick_event(1100.0, 100.0, 11))

    assert scene.state == GameState.PLAYING
    assert scene.session.spawner.last_spawn_time == 1100.0


def test_pointer_and_key_in_same_frame_flap_once(scene, scene_context):
    bus = scene_context.event_bus
    scene_context.keys._press(pygame.K_SPACE)
    bus.emit(flap_event(source="pointer"))
    bus.emit(tick_event(16.0, 16.0, 1))
    assert scene.state == GameState.PLAYING

    bus.emit(tick_event(32.0, 16.0, 2))
    assert scene.state == GameState.PLAYING


def test_pairs_spawn_on_interval_after_start(scene, scene_context):
    bus = scene_context.event_bus
    start(scene)
    # Keep the player airborne so nothing ends the round
    scene.session.player.set_gravity(False)

    spawn_frames = []
    for frame in range(1, 200):
        before = len(scene.session.obstacles)
        bus.emit(tick_event(frame * 16.0, 16.0, frame))
        if len(scene.session.obstacles) > before:
            spawn_frames.append(frame)

    # First frame strictly after 1500 ms, then every 1500 ms after that
    assert spawn_frames[:2] == [94, 188]
    assert scene.state == GameState.PLAYING


def test_collision_with_pipe_ends_game(scene, scene_context):
    bus = scene_context.event_bus
    start(scene)
    pair = scene.session.spawner.spawn(scene.session.obstacles)
    pair.top.sprite.set_position(80, 300)

    collisions = []
    bus.subscribe(EventType.COLLISION, collisions.append)
    bus.emit(tick_event(16.0, 16.0, 1))

    assert scene.state == GameState.GAME_OVER
    assert len(collisions) == 1
    assert all(segment.velocity_x == 0 for segment in scene.session.obstacles)
    player = scene.session.player
    assert player.velocity_y == 0
    assert not player.gravity_enabled
    assert scene.game_over_text.visible
    assert scene.restart_text.visible


def test_collision_is_idempotent(scene, scene_context):
    changes = []
    scene_context.event_bus.subscribe(
        EventType.STATE_CHANGED, lambda e: changes.append(e.data["to"])
    )
    start(scene)
    crash(scene)
    crash(scene)
    scene._on_collide(scene.session.player.sprite, scene.road)

    assert changes == ["PLAYING", "GAME_OVER"]


def test_collision_before_start_is_ignored(scene):
    scene._on_collide(scene.session.player.sprite, scene.road)
    assert scene.state == GameState.NOT_STARTED


def test_frozen_world_stays_frozen(scene, scene_context):
    bus = scene_context.event_bus
    start(scene)
    pair = scene.session.spawner.spawn(scene.session.obstacles)
    crash(scene)

    x_before = pair.top.x
    y_before = scene.session.player.y
    for frame in range(2, 200):
        bus.emit(tick_event(frame * 16.0, 16.0, frame))

    assert pair.top.x == x_before
    assert scene.session.player.y == y_before
    assert scene.session.obstacles.pair_ids() == [pair.pair_id]


def test_score_frozen_at_game_over_and_reset_on_restart(scene, scene_context):
    display = scene_context.score_display
    session = scene.session
    start(scene)

    for _ in range(3):
        pair = session.spawner.spawn(session.obstacles)
        pair.top.sprite.x = 70
        pair.bottom.sprite.x = 70
    scene.update(10.0, 16.0)
    assert session.score.score == 3
    assert display.get_text() == "Score: 3"

    crash(scene)
    scene.update(20.0, 16.0)
    assert display.get_text() == "Score: 3"

    scene.flap()
    assert scene.state == GameState.NOT_STARTED
    assert display.get_text() == "Score: 0"


def test_restart_resets_world(scene, scene_context):
    session = scene.session
    physics = scene_context.physics
    start(scene)
    pairs = [session.spawner.spawn(session.obstacles) for _ in range(2)]
    session.player.sprite.set_position(80, 420)
    session.player.angle = 45
    crash(scene)

    scene.flap()
    scene.update(30.0, 16.0)

    assert scene.state == GameState.NOT_STARTED
    assert len(session.obstacles) == 0
    for pair in pairs:
        for segment in (pair.top, pair.bottom):
            assert segment.destroyed
            assert segment.sprite not in physics.sprites
            assert segment.sprite not in scene_context.display_list.items

    player = session.player
    assert (player.x, player.y) == (80, 300)
    assert player.angle == 0
    assert player.velocity_y == 0
    assert not player.gravity_enabled

    assert scene.start_text.visible
    assert not scene.game_over_text.visible
    assert not scene.restart_text.visible


def test_second_round_plays_normally(scene):
    start(scene)
    crash(scene)
    scene.flap()
    scene.now = 5000.0
    scene.flap()

    assert scene.state == GameState.PLAYING
    assert scene.session.spawner.last_spawn_time == 5000.0
    assert scene.session.player.velocity_y == -350


def test_stop_detaches_from_ticks(scene, scene_context):
    scene.stop()
    scene_context.event_bus.emit(tick_event(16.0, 16.0, 1))
    assert scene.background.tile_position_x == 0


def test_clamp_limits_to_range():
    assert clamp(-35.0, -30, 90) == -30
    assert clamp(12.5, -30, 90) == 12.5
    assert clamp(500.0, -30, 90) == 90
