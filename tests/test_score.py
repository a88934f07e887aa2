from flappy.core.events import EventBus, EventType
from flappy.engine.displays import ScoreLabel
from flappy.engine.sprites import Sprite
from flappy.game.obstacles import ObstacleCollection, ObstaclePair, ObstacleSegment
from flappy.game.score import ScoreTracker


def make_pair(pair_id, x):
    top = ObstacleSegment(Sprite("pipe", x, 100, 64, 400), pair_id, is_top=True, scored=False)
    bottom = ObstacleSegment(Sprite("pipe", x, 700, 64, 400), pair_id, is_top=False, scored=True)
    return ObstaclePair(pair_id, 300, top, bottom)


def test_display_shows_initial_score():
    label = ScoreLabel()
    ScoreTracker(label)
    assert label.get_text() == "Score: 0"


def test_passing_a_pair_scores_once():
    label = ScoreLabel()
    tracker = ScoreTracker(label)
    obstacles = ObstacleCollection()
    pair = make_pair(0, 70)
    obstacles.add_pair(pair)

    assert tracker.check(obstacles, player_x=80) == 1
    assert tracker.score == 1
    assert label.get_text() == "Score: 1"
    assert pair.top.scored

    # Still left of the player on the next frame
    assert tracker.check(obstacles, player_x=80) == 0
    assert tracker.score == 1


def test_segment_not_yet_passed_does_not_score():
    tracker = ScoreTracker(ScoreLabel())
    obstacles = ObstacleCollection()
    obstacles.add_pair(make_pair(0, 80))
    obstacles.add_pair(make_pair(1, 400))

    assert tracker.check(obstacles, player_x=80) == 0
    assert tracker.score == 0


def test_several_pairs_score_in_one_check():
    tracker = ScoreTracker(ScoreLabel())
    obstacles = ObstacleCollection()
    for pair_id, x in enumerate([-10, 20, 60]):
        obstacles.add_pair(make_pair(pair_id, x))

    assert tracker.check(obstacles, player_x=80) == 3
    assert tracker.score == 3


def test_reset_updates_display():
    label = ScoreLabel()
    tracker = ScoreTracker(label)
    tracker.increment()
    tracker.increment()
    assert label.get_text() == "Score: 2"

    tracker.reset()
    assert tracker.score == 0
    assert label.get_text() == "Score: 0"


def test_score_changes_are_published():
    bus = EventBus()
    seen = []
    bus.subscribe(EventType.SCORE_CHANGED, lambda e: seen.append(e.data["score"]))

    tracker = ScoreTracker(ScoreLabel(), bus)
    tracker.increment()
    tracker.reset()

    assert seen == [0, 1, 0]
