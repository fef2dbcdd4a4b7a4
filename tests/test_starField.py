import math

import pytest
from pygame.math import Vector2 as v2

from particles.star import Star, DEPTH_FLOOR, CONTAINMENT_RADIUS
from particles.starField import StarField, InvalidConfigError


def makeField(**kwargs):
    config = dict(
        starsPerSecond=10,
        distancePerSecond=10,
        framerate=10,
        minDistance=100,
        maxDistance=200,
        width=800,
        height=600,
        seed=1234,
    )
    config.update(kwargs)
    return StarField(**config)


def test_one_star_per_frame():
    field = makeField()
    field.update()

    assert len(field) == 1
    star = field.stars[0]
    assert 100 <= star.previous_depth < 200
    assert -0.5 <= star.previous_position.x < 0.5
    assert -0.5 <= star.previous_position.y < 0.5


def test_spawned_stars_are_advanced_in_same_update():
    field = makeField(distancePerSecond=20)
    field.update()

    star = field.stars[0]
    assert star.current_depth == pytest.approx(star.previous_depth - 2)
    assert field.frame == 1


def test_bernoulli_spawning_matches_rate():
    field = makeField(starsPerSecond=5, seed=42)
    for _ in range(1000):
        field.update()

    # binomial(1000, 0.5), sd ~ 15.8
    assert abs(field.spawned_total - 500) < 80


def test_bernoulli_spawning_is_deterministic_for_seed():
    first = makeField(starsPerSecond=3, seed=7)
    second = makeField(starsPerSecond=3, seed=7)
    for _ in range(200):
        first.update()
        second.update()

    assert first.spawned_total == second.spawned_total
    assert [s.current_depth for s in first] == [s.current_depth for s in second]


def test_fractional_spawns_are_truncated():
    field = makeField(starsPerSecond=15)
    spawned = [field.spawn_new_stars() for _ in range(10)]
    assert spawned == [1] * 10


def test_fractional_spawns_accumulate_when_enabled():
    field = makeField(starsPerSecond=15, accumulateSpawns=True)
    spawned = [field.spawn_new_stars() for _ in range(10)]
    assert spawned == [1, 2] * 5
    assert field.spawned_total == 15


def test_many_spawns_per_frame():
    field = makeField(starsPerSecond=50000, framerate=60)
    assert field.spawn_new_stars() == 833
    assert len(field) == 833


def test_despawn_outside_containment_radius():
    eps = 1e-6
    field = makeField()
    outside = Star(v2(CONTAINMENT_RADIUS + eps, 0), 150)
    inside = Star(v2(0, CONTAINMENT_RADIUS - eps), 150)
    field.stars.extend([outside, inside])

    assert field.despawn_stars() == 1
    assert field.stars == [inside]
    assert field.despawned_total == 1


def test_despawn_at_depth_floor():
    field = makeField()
    near = Star((0, 0), 150)
    near.advance(1000)
    assert near.current_depth == DEPTH_FLOOR
    field.stars.append(near)

    field.despawn_stars()
    assert len(field) == 0


def test_despawn_keeps_all_survivors():
    field = makeField()
    stars = [Star((0.1 * i - 0.5, 0), 150) for i in range(10)]
    doomed = [Star((2, 2), 150) for _ in range(5)]
    field.stars.extend(stars[:3] + doomed[:2] + stars[3:7] + doomed[2:] + stars[7:])

    assert field.despawn_stars() == 5
    assert sorted(map(id, field.stars)) == sorted(map(id, stars))


def test_star_is_eventually_despawned():
    field = makeField(starsPerSecond=1, framerate=10, distancePerSecond=10)
    star = Star((0.01, 0.01), 150)
    field.stars.append(star)

    # one unit per frame, the depth floor is reached within maxDistance frames
    bound = math.ceil(field.maxDistance / field.distancePerFrame) + 2
    for _ in range(bound):
        field.despawn_stars()
        if star not in field.stars:
            break
        field.move_stars()
    assert star not in field.stars


def test_draw_emits_one_segment_per_star():
    field = makeField(starsPerSecond=100)
    for _ in range(5):
        field.update()

    segments = field.draw()
    assert len(segments) == len(field)
    for start, end, color in segments:
        assert isinstance(start, v2) and isinstance(end, v2)
        assert color == (255, 255, 255)


def test_draw_does_not_change_state():
    field = makeField(starsPerSecond=100)
    field.update()
    before = [(s.current_depth, v2(s.current_position)) for s in field]

    first = field.draw((1024, 768))
    second = field.draw((1024, 768))

    assert [(s.current_depth, s.current_position) for s in field] == before
    assert [(a, b) for a, b, _ in first] == [(a, b) for a, b, _ in second]
    assert first is not second


def test_draw_uses_configured_viewport():
    field = makeField()
    field.update()
    assert field.draw() == field.draw((800, 600))


def test_draw_rejects_bad_viewport():
    field = makeField()
    with pytest.raises(InvalidConfigError):
        field.draw((0, 600))


def test_config_is_read_only():
    field = makeField()
    with pytest.raises(AttributeError):
        field.framerate = 30
    assert field.starsPerFrame == 1
    assert field.distancePerFrame == 1
    assert field.res == v2(800, 600)


@pytest.mark.parametrize("kwargs", [
    {"framerate": 0},
    {"framerate": -10},
    {"framerate": 10.5},
    {"starsPerSecond": 0},
    {"starsPerSecond": -1},
    {"distancePerSecond": 0},
    {"distancePerSecond": float("nan")},
    {"minDistance": 0},
    {"minDistance": 200, "maxDistance": 100},
    {"minDistance": 150, "maxDistance": 150},
    {"width": 0},
    {"height": -1},
    {"color": (255, 255)},
    {"color": (300, 0, 0)},
    {"color": None},
    {"color": 255},
    {"color": [255, "a", 0]},
    {"color": (True, 0, 0)},
    {"color": (0, 0, float("nan"))},
    {"seed": "abc"},
    {"seed": -1},
    {"accumulateSpawns": "yes"},
])
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(InvalidConfigError):
        makeField(**kwargs)


def test_invalid_config_is_a_value_error():
    with pytest.raises(ValueError, match="framerate"):
        makeField(framerate=0)
