import logging

from flappy.core.state import GameState, StateMachine


def test_initial_state():
    sm = StateMachine()
    assert sm.state == GameState.NOT_STARTED
    assert not sm.is_playing
    assert not sm.is_game_over


def test_full_cycle():
    sm = StateMachine()
    assert sm.transition(GameState.PLAYING)
    assert sm.transition(GameState.GAME_OVER)
    assert sm.transition(GameState.NOT_STARTED)
    assert sm.state == GameState.NOT_STARTED


def test_invalid_transitions_are_refused(caplog):
    sm = StateMachine()
    with caplog.at_level(logging.WARNING):
        assert not sm.transition(GameState.GAME_OVER)
    assert sm.state == GameState.NOT_STARTED
    assert "Invalid transition" in caplog.text

    sm.transition(GameState.PLAYING)
    assert not sm.transition(GameState.PLAYING)
    assert not sm.transition(GameState.NOT_STARTED)
    assert sm.state == GameState.PLAYING


def test_listeners_notified_in_order():
    sm = StateMachine()
    seen = []
    sm.add_listener(lambda old, new: seen.append((old, new)))

    sm.transition(GameState.PLAYING)
    sm.transition(GameState.GAME_OVER)

    assert seen == [
        (GameState.NOT_STARTED, GameState.PLAYING),
        (GameState.PLAYING, GameState.GAME_OVER),
    ]


def test_failing_listener_does_not_block_transition(caplog):
    sm = StateMachine()
    seen = []

    def broken(old, new):
        raise RuntimeError("boom")

    sm.add_listener(broken)
    sm.add_listener(lambda old, new: seen.append(new))

    with caplog.at_level(logging.ERROR):
        assert sm.transition(GameState.PLAYING)

    assert seen == [GameState.PLAYING]
    assert "boom" in caplog.text


def test_remove_listener():
    sm = StateMachine()
    seen = []
    listener = lambda old, new: seen.append(new)  # noqa: E731
    sm.add_listener(listener)
    sm.remove_listener(listener)
    sm.transition(GameState.PLAYING)
    assert seen == []


def test_starting_state_can_be_chosen():
    sm = StateMachine(GameState.GAME_OVER)
    assert sm.is_game_over
    assert sm.transition(GameState.NOT_STARTED)
    assert not sm.can_transition(GameState.GAME_OVER)
